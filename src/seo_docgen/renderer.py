"""
Change-marker rendering.

Turns the marker-bearing text of one block into InlineRuns:

- text between markers       -> plain run
- [[KEYWORD: X]]             -> highlighted run "X"
- [[ADJUSTED: A → B]]        -> highlighted run "B" (A is dropped)
- [[ADJUSTED: B]]            -> highlighted run "B"
- [[NEW]]                    -> nothing; the text around it is merged
- **text**                   -> bold runs (markers inside stay highlighted)

Joining the run texts always gives strip_change_markers(text).
"""

import logging

from .markers import EMPHASIS, find_leaked_markers, tokenize
from .models import Block, InlineRun, RenderedBlock

logger = logging.getLogger(__name__)


def render(raw_text: str) -> list[InlineRun]:
    """
    Render a block's text into plain and highlighted runs.

    Args:
        raw_text: Normalized text of a single block, change markers inline.

    Returns:
        Ordered runs. Adjacent plain runs with the same weight are merged and
        empty runs omitted, so text without markers yields a single plain run.
    """
    runs: list[InlineRun] = []
    pending_plain: list[str] = []
    tokens = tokenize(raw_text)

    # An unpaired final delimiter is dropped without opening a bold span
    delimiters = sum(token.count(EMPHASIS) for token in tokens if isinstance(token, str))
    toggles_left = delimiters - delimiters % 2
    bold = False

    def flush_plain() -> None:
        if pending_plain:
            text = "".join(pending_plain)
            pending_plain.clear()
            if text:
                runs.append(InlineRun(text=text, bold=bold))

    for token in tokens:
        if isinstance(token, str):
            pieces = token.split(EMPHASIS)
            pending_plain.append(pieces[0])
            for piece in pieces[1:]:
                if toggles_left:
                    flush_plain()
                    bold = not bold
                    toggles_left -= 1
                pending_plain.append(piece)
            continue

        if not token.highlighted or not token.display_text:
            # NEW sentinel or an empty marker: contributes no text
            continue

        flush_plain()
        runs.append(InlineRun(text=token.display_text, highlighted=True, bold=bold))

    flush_plain()

    leaks = [leak for run in runs if not run.highlighted for leak in find_leaked_markers(run.text)]
    if leaks:
        logger.warning(f"Unparsed marker syntax left as literal text: {leaks}")

    return runs


def render_block(block: Block) -> RenderedBlock:
    """Render a segmented block, keeping its kind and list flag."""
    return RenderedBlock(kind=block.kind, runs=render(block.raw_text), ordered=block.ordered)
