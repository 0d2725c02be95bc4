"""
Change-marker grammar for optimizer output.

The content optimizer flags its edits inline:
- [[KEYWORD: term]]            a keyword was inserted
- [[ADJUSTED: old → new]]      a phrase was adjusted
- [[NEW]] / [[NEW FAQ SECTION]] a sentence or section was added

Markdown **emphasis** travels through the same text and is rendered as
bold; its delimiters are removed wherever marker syntax is.

This module is the only place that parses those markers. Every other stage
consumes the typed ChangeMarker values produced by tokenize() instead of
matching marker text itself.

Parsing is fail-soft: an unclosed or malformed marker is literal text.
"""

import re
from dataclasses import dataclass
from typing import Union

from .models import ChangeSummary

ARROW = "→"

EMPHASIS = "**"

# Content may not contain brackets, so nested or unclosed markers fall
# through as literal text.
MARKER_RE = re.compile(
    r"\[\[\s*(?P<kind>KEYWORD|ADJUSTED)\s*:\s*(?P<content>[^\[\]]*?)\s*\]\]"
    r"|\[\[\s*(?P<new>NEW)\b(?P<label>[^\[\]]*)\]\]",
    re.IGNORECASE,
)

# Accepts the canonical glyph and the ASCII spellings LLMs fall back to
ARROW_RE = re.compile(r"\s*(?:→|-{1,2}>|={1,2}>)\s*")

LEAK_PATTERNS = [
    r"\[\[",
    r"\]\]",
    r"\[(?:H[1-6]|PARA|BULLET)\]",
]


@dataclass(frozen=True)
class KeywordMarker:
    """[[KEYWORD: term]]"""
    term: str

    @property
    def display_text(self) -> str:
        return self.term

    @property
    def highlighted(self) -> bool:
        return True

    def canonical(self) -> str:
        return f"[[KEYWORD: {self.term}]]"


@dataclass(frozen=True)
class AdjustedMarker:
    """
    [[ADJUSTED: old → new]]

    Only new_text is shown in the document; old_text is kept for change
    reporting. Without an arrow, old_text is empty and the whole captured
    content is new_text.
    """
    old_text: str
    new_text: str

    @property
    def display_text(self) -> str:
        return self.new_text

    @property
    def highlighted(self) -> bool:
        return True

    @property
    def has_arrow(self) -> bool:
        return bool(self.old_text)

    def canonical(self) -> str:
        if self.old_text:
            return f"[[ADJUSTED: {self.old_text} {ARROW} {self.new_text}]]"
        return f"[[ADJUSTED: {self.new_text}]]"


@dataclass(frozen=True)
class NewMarker:
    """[[NEW]] or [[NEW <label>]]. Carries no renderable content."""
    label: str = ""

    @property
    def display_text(self) -> str:
        return ""

    @property
    def highlighted(self) -> bool:
        return False

    @property
    def is_faq_section(self) -> bool:
        return "FAQ" in self.label.upper()

    def canonical(self) -> str:
        return f"[[NEW {self.label}]]" if self.label else "[[NEW]]"


ChangeMarker = Union[KeywordMarker, AdjustedMarker, NewMarker]
Token = Union[str, ChangeMarker]


def parse_marker(kind: str, content: str) -> ChangeMarker:
    """
    Build a ChangeMarker from a marker kind and its captured content.

    Args:
        kind: "KEYWORD", "ADJUSTED" or "NEW" (case-insensitive).
        content: Text between the colon and the closing brackets (for NEW,
            the optional label).

    Returns:
        The typed marker.
    """
    kind = kind.upper()
    content = content.replace(EMPHASIS, "").strip()

    if kind == "KEYWORD":
        return KeywordMarker(term=content)

    if kind == "ADJUSTED":
        parts = ARROW_RE.split(content, maxsplit=1)
        if len(parts) == 2:
            return AdjustedMarker(old_text=parts[0].strip(), new_text=parts[1].strip())
        return AdjustedMarker(old_text="", new_text=content)

    return NewMarker(label=content.lstrip(":").strip())


def _marker_from_match(match: re.Match) -> ChangeMarker:
    if match.group("new"):
        return parse_marker("NEW", match.group("label") or "")
    return parse_marker(match.group("kind"), match.group("content"))


def tokenize(text: str) -> list[Token]:
    """
    Split text into literal strings and ChangeMarker values, in order.

    Empty literal strings are never emitted.

    Example:
        >>> tokenize("with [[KEYWORD: liability cover]] today")
        ['with ', KeywordMarker(term='liability cover'), ' today']
    """
    if not text:
        return []

    tokens: list[Token] = []
    last_end = 0

    for match in MARKER_RE.finditer(text):
        if match.start() > last_end:
            tokens.append(text[last_end:match.start()])
        tokens.append(_marker_from_match(match))
        last_end = match.end()

    if last_end < len(text):
        tokens.append(text[last_end:])

    return tokens


def replace_markers(text: str, replacement) -> str:
    """
    Replace every change marker with replacement(marker).

    Literal text is left untouched.
    """
    if not text:
        return text
    return MARKER_RE.sub(lambda m: replacement(_marker_from_match(m)), text)


def strip_emphasis(text: str) -> str:
    """Remove **emphasis** delimiters."""
    if not text:
        return text
    return text.replace(EMPHASIS, "")


def strip_change_markers(text: str) -> str:
    """
    Remove change-marker syntax, keeping what the document would show.

    Keyword terms and the after-arrow half of ADJUSTED markers are kept
    (trimmed); NEW sentinels and **emphasis** delimiters disappear.
    Surrounding text is not touched.
    """
    return "".join(
        strip_emphasis(token) if isinstance(token, str) else token.display_text
        for token in tokenize(text)
    )


def remove_new_sentinels(text: str) -> str:
    """Delete [[NEW]] / [[NEW ...]] sentinels, leaving other markers verbatim."""
    if not text:
        return text
    return MARKER_RE.sub(lambda m: "" if m.group("new") else m.group(0), text)


def has_change_markers(text: str) -> bool:
    """Check if text contains at least one well-formed change marker."""
    return bool(text) and MARKER_RE.search(text) is not None


def summarize_changes(text: str) -> ChangeSummary:
    """
    Count the change markers in annotated text.

    Args:
        text: Raw or normalized annotated text. NEW sentinels are only
            visible before normalization, so pass raw text for full counts.

    Returns:
        ChangeSummary with per-kind counts.
    """
    summary = ChangeSummary()

    for token in tokenize(text):
        if isinstance(token, KeywordMarker):
            summary.keyword_insertions += 1
        elif isinstance(token, AdjustedMarker):
            summary.phrase_adjustments += 1
        elif isinstance(token, NewMarker):
            if token.is_faq_section:
                summary.faq_section_added = True
            else:
                summary.new_sentences += 1

    return summary


def find_leaked_markers(text: str) -> list[str]:
    """
    Find marker syntax that survived rendering.

    Args:
        text: Rendered plain text.

    Returns:
        The leaked snippets, empty when the text is clean.
    """
    if not text:
        return []

    found = []
    for pattern in LEAK_PATTERNS:
        found.extend(m.group(0) for m in re.finditer(pattern, text, re.IGNORECASE))
    return found
