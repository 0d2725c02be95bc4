"""
Data models for the annotated-content pipeline.

Blocks flow through the pipeline in three shapes:
- Block: one typed line of normalized text, change markers still inline.
- InlineRun: an atomic piece of rendered text, highlighted or plain.
- RenderedBlock: a block's kind plus its ordered runs.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class BlockKind(Enum):
    """Types of content blocks."""
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    PARAGRAPH = "paragraph"
    BULLET = "bullet"

    @property
    def heading_level(self) -> int:
        """Heading level 1-3, or 0 for body blocks."""
        return _HEADING_LEVELS.get(self, 0)

    @property
    def is_heading(self) -> bool:
        return self.heading_level > 0

    @classmethod
    def for_heading_level(cls, level: int) -> "BlockKind":
        """Map a heading level to its kind, clamping to 1-3."""
        level = min(max(level, 1), 3)
        return {1: cls.HEADING_1, 2: cls.HEADING_2, 3: cls.HEADING_3}[level]


_HEADING_LEVELS = {
    BlockKind.HEADING_1: 1,
    BlockKind.HEADING_2: 2,
    BlockKind.HEADING_3: 3,
}


@dataclass
class Block:
    """A typed line of normalized text with change markers still inline."""
    kind: BlockKind
    raw_text: str
    ordered: bool = False  # Numbered-list bullet


@dataclass(frozen=True)
class InlineRun:
    """A span of rendered text."""
    text: str
    highlighted: bool = False
    bold: bool = False  # From **emphasis** in the source text


@dataclass
class RenderedBlock:
    """A block ready for the document writer."""
    kind: BlockKind
    runs: list[InlineRun] = field(default_factory=list)
    ordered: bool = False

    @property
    def plain_text(self) -> str:
        """Concatenated run text, ignoring highlights."""
        return "".join(run.text for run in self.runs)

    @property
    def has_highlights(self) -> bool:
        return any(run.highlighted for run in self.runs)


@dataclass
class ChangeSummary:
    """Counts of the change markers found in a piece of annotated text."""
    keyword_insertions: int = 0
    phrase_adjustments: int = 0
    new_sentences: int = 0
    faq_section_added: bool = False

    @property
    def total(self) -> int:
        return self.keyword_insertions + self.phrase_adjustments + self.new_sentences

    def describe(self) -> str:
        """Human-readable one-line summary."""
        if self.total == 0 and not self.faq_section_added:
            return "No changes made to original content."

        parts = []
        if self.keyword_insertions:
            parts.append(_plural(self.keyword_insertions, "keyword insertion"))
        if self.phrase_adjustments:
            parts.append(_plural(self.phrase_adjustments, "phrase adjustment"))
        if self.new_sentences:
            parts.append(_plural(self.new_sentences, "new sentence"))
        if self.faq_section_added:
            parts.append("FAQ section added")

        return f"Changes: {', '.join(parts)}."


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count > 1 else ''}"


@dataclass
class RenderedDocument:
    """
    Output of one pipeline run.

    Attributes:
        title: The level-1 heading taken from the dedicated title field, or
            None when there was no title or it was deduplicated away.
        blocks: Body blocks in document order.
        changes: Change marker counts for the body text.
    """
    title: Optional[RenderedBlock] = None
    blocks: list[RenderedBlock] = field(default_factory=list)
    changes: ChangeSummary = field(default_factory=ChangeSummary)

    @property
    def level_one_headings(self) -> list[RenderedBlock]:
        """Every level-1 heading the document will show, title included."""
        headings = [self.title] if self.title is not None else []
        headings.extend(b for b in self.blocks if b.kind is BlockKind.HEADING_1)
        return headings
