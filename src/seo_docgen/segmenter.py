"""
Split normalized text into typed blocks.

One block per non-empty line. The leading marker decides the kind:

    [H1] / [H2] / [H3]   heading
    • text               bullet
    1. text / 1) text    bullet with ordered=True
    anything else        paragraph

Blank lines are dropped without emitting spacer blocks; paragraph spacing
comes from the document styles.
"""

import re

from .models import Block, BlockKind

_HEADING_RE = re.compile(r"^\[H([1-3])\]\s*")
_BULLET_RE = re.compile(r"^(?:•|\[BULLET\])\s*")
_NUMBERED_RE = re.compile(r"^\d+[.)]\s+")
_PARA_RE = re.compile(r"^\[PARA\]\s*")


def classify_line(line: str) -> Block:
    """
    Build the block for a single non-empty line.

    Args:
        line: One trimmed line of normalized text.

    Returns:
        Block with the structural prefix removed from raw_text.
    """
    match = _HEADING_RE.match(line)
    if match:
        kind = BlockKind.for_heading_level(int(match.group(1)))
        return Block(kind=kind, raw_text=line[match.end():].strip())

    match = _BULLET_RE.match(line)
    if match:
        return Block(kind=BlockKind.BULLET, raw_text=line[match.end():].strip())

    match = _NUMBERED_RE.match(line)
    if match:
        return Block(kind=BlockKind.BULLET, raw_text=line[match.end():].strip(), ordered=True)

    match = _PARA_RE.match(line)
    if match:
        line = line[match.end():]

    return Block(kind=BlockKind.PARAGRAPH, raw_text=line.strip())


def segment(text: str) -> list[Block]:
    """
    Split normalized text into blocks in document order.

    Lines whose text is empty once the structural prefix is removed
    (a bare "[H2]" or "•") are dropped.
    """
    blocks = []
    for line in text.split("\n") if text else []:
        line = line.strip()
        if not line:
            continue
        block = classify_line(line)
        if block.raw_text:
            blocks.append(block)
    return blocks
