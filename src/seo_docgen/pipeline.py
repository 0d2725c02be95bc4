"""
Annotated-content pipeline.

normalize -> strip_footer -> segment -> deduplicate level-1 headings -> render

One call handles one document. Every call gets its own HeadingRegistry, so
concurrent calls never see each other's headings.
"""

import logging
from typing import Optional

from .config import PipelineConfig
from .errors import EmptyContentError
from .footer_filter import strip_footer
from .headings import HeadingRegistry
from .markers import summarize_changes
from .models import Block, BlockKind, RenderedBlock, RenderedDocument
from .normalizer import normalize, normalize_inline
from .renderer import render, render_block
from .segmenter import segment

logger = logging.getLogger(__name__)


def build_document(
    raw_text: Optional[str],
    h1: Optional[str] = None,
    config: Optional[PipelineConfig] = None,
    registry: Optional[HeadingRegistry] = None,
) -> RenderedDocument:
    """
    Turn the optimizer's annotated text into rendered blocks.

    Args:
        raw_text: Annotated body text returned by the content optimizer.
        h1: Optional title from the optimizer's dedicated H1 field. It is
            offered to the heading registry before any body heading, so a
            body copy of the same heading is dropped.
        config: Pipeline configuration.
        registry: Heading registry for this run. Leave as None to get a
            fresh one; pass one only to share deduplication with headings
            the caller emits itself for the same document.

    Returns:
        RenderedDocument with the accepted title and the body blocks.

    Raises:
        EmptyContentError: If raw_text is None or blank, or nothing is left
            after normalization and footer removal.
    """
    if raw_text is None or not raw_text.strip():
        raise EmptyContentError("Annotated content is empty; nothing to render")

    config = config or PipelineConfig()
    if registry is None:
        registry = HeadingRegistry()

    changes = summarize_changes(raw_text)

    normalized = normalize(raw_text)
    if config.strip_footer:
        normalized = strip_footer(normalized, config)
    if not normalized.strip():
        raise EmptyContentError("Annotated content has no renderable text after normalization")

    blocks = segment(normalized)
    logger.debug(f"Segmented annotated content into {len(blocks)} blocks")

    title = _render_title(h1, registry)
    top_heading_emitted = title is not None

    rendered: list[RenderedBlock] = []
    for block in blocks:
        if block.kind is BlockKind.HEADING_1:
            if not registry.accept(block.raw_text):
                logger.debug(f"Dropping duplicate H1: {block.raw_text!r}")
                continue
            if top_heading_emitted and config.demote_extra_h1:
                logger.debug(f"Demoting extra H1 to H2: {block.raw_text!r}")
                block = Block(kind=BlockKind.HEADING_2, raw_text=block.raw_text)
            top_heading_emitted = True

        rendered_block = render_block(block)
        if rendered_block.runs:
            rendered.append(rendered_block)

    logger.info(f"Rendered {len(rendered)} blocks. {changes.describe()}")

    return RenderedDocument(title=title, blocks=rendered, changes=changes)


def _render_title(h1: Optional[str], registry: HeadingRegistry) -> Optional[RenderedBlock]:
    """Normalize and register the dedicated H1 field."""
    if not h1 or not h1.strip():
        return None

    title_text = normalize_inline(h1)
    if not registry.accept(title_text):
        return None

    runs = render(title_text)
    if not runs:
        return None
    return RenderedBlock(kind=BlockKind.HEADING_1, runs=runs)
