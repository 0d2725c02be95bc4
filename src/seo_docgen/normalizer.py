# -*- coding: utf-8 -*-
"""
Marker normalization for annotated optimizer output.

The optimizer's text is unreliable: legacy Markdown headings mixed with
[H2] tags, bracket-less "H2 Title" lines, change markers glued onto the
neighbouring word, escaped punctuation, stray images and call-to-action
boilerplate. normalize() rewrites all of that into one canonical form:

- [H1] / [H2] / [H3] at the start of their own line
- [PARA] removed, [BULLET] and Markdown bullets as a "• " prefix
- [[NEW]] sentinels removed
- [[KEYWORD: X]] and [[ADJUSTED: A → B]] spelled canonically, padded by a
  single space where they touch a word
- **emphasis** kept as written; the renderer turns it into bold runs
- single spaces, trimmed lines, at most one blank line in a row

Each stage is a plain str -> str function listed in NORMALIZATION_STAGES.
Stages never raise; unrecognized syntax is left as literal text.
"""

import html
import logging
import re
from typing import Callable

import ftfy

from .markers import remove_new_sentinels, replace_markers

logger = logging.getLogger(__name__)

BULLET_GLYPH = "• "

# A pass of every stage can expose new work for an earlier stage (removing a
# [[NEW]] sentinel can leave "text. H2 Title"), so normalize() repeats the
# stages until the text stops changing.
MAX_PASSES = 4

STRUCTURAL_TAG = r"\[(?:H[1-3]|PARA|BULLET)\]"

# --- clean_artifacts ---------------------------------------------------------

_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_HTML_HEADING_RE = re.compile(r"<h([1-6])\b[^<>]*>", re.IGNORECASE)
_HTML_LIST_ITEM_RE = re.compile(r"<li\b[^<>]*>", re.IGNORECASE)
_HTML_BLOCK_RE = re.compile(r"</?(?:p|div|section|ul|ol|li|h[1-6])\b[^<>]*>", re.IGNORECASE)
_HTML_TAG_RE = re.compile(r"</?[a-zA-Z][^<>]*>")
_HR_LINE_RE = re.compile(r"^[ \t]*(?:[-*_][ \t]*){3,}$", re.MULTILINE)
_MD_IMAGE_RE = re.compile(r"!\[[^\]]*\]\([^)]*\)")
_MD_LINK_RE = re.compile(r"\[([^\[\]]+)\]\((?:https?://|/|#|mailto:|tel:)[^()\s]*\)")
_ESCAPED_PUNCT_RE = re.compile(r"\\+([`*_{}\[\]()#+\-.!|>~])")
_CTA_LINE_RE = re.compile(
    r"^[ \t]*(?:get|request|call for)[ \t]+(?:a|an|your)?[ \t]*(?:free[ \t]+)?"
    r"(?:quote|estimate)(?:[ \t]+(?:today|now|online))?[ \t]*[!.»›>→]*[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)

# --- rewrite_structural_markers ----------------------------------------------

_BRACKET_TAG_RE = re.compile(r"\[\s*(h[1-6]|para|bullet)\s*\]", re.IGNORECASE)
_DEEP_HEADING_RE = re.compile(r"\[H[4-6]\]")
_MD_HEADING_RE = re.compile(r"^[ \t]*(#{1,6})[ \t]+", re.MULTILINE)
_BARE_LINE_START_RE = re.compile(r"^[ \t]*(H[1-3])[ \t]*:?[ \t]+(?=\S)", re.MULTILINE)
_BARE_MID_LINE_RE = re.compile(r"(?<=[.!?:][ \t])(H[1-3])[ \t]+(?=[A-Z0-9\"'\[])")
_TAG_SPACING_RE = re.compile(r"(\[(?:H[1-3]|PARA|BULLET)\])[ \t]*:?[ \t]*")
_TAG_THEN_HASHES_RE = re.compile(r"^(\[H[1-3]\]) #{1,6}[ \t]+", re.MULTILINE)
_DANGLING_HEADING_RE = re.compile(r"^(\[H[1-3]\])[ \t]*\n+[ \t]*(?=[^\s\[•])", re.MULTILINE)
_TAG_MID_LINE_RE = re.compile(r"(?<=\S)[ \t]*(?=" + STRUCTURAL_TAG + ")")

# --- collapse_block_markers --------------------------------------------------

_PARA_RE = re.compile(r"^[ \t]*(?:\[PARA\]|PARA\b[ \t]*:?)[ \t]*", re.MULTILINE)
_BULLET_TAG_RE = re.compile(r"^[ \t]*(?:\[BULLET\]|BULLET\b[ \t]*:?)[ \t]*", re.MULTILINE)
_MD_BULLET_RE = re.compile(r"^[ \t]*(?:[-*+•·▪◦][ \t]+)+", re.MULTILINE)

# --- repair_marker_spacing ---------------------------------------------------

_OPEN_NEEDS_SPACE_RE = re.compile(r"(?<=[\w,.;:)])(?=\[\[(?:KEYWORD|ADJUSTED):)")
_CLOSE_NEEDS_SPACE_RE = re.compile(r"\]\](?=[\w(])")

# --- remove_orphan_lines -----------------------------------------------------

_ORPHAN_LINE_RE = re.compile(
    r"^[ \t]*(?:•[ \t]*)?(?:<?(?:https?://|www\.)\S+?>?|!\[[^\]]*\]\([^)]*\))[ \t]*$",
    re.MULTILINE,
)

# --- collapse_whitespace -----------------------------------------------------

_INLINE_SPACE_RE = re.compile(r"[ \t\u00a0]+")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


def _until_stable(func: Callable[[str], str], text: str, limit: int = MAX_PASSES) -> str:
    """Apply func until the text stops changing (at most limit times)."""
    for _ in range(limit):
        updated = func(text)
        if updated == text:
            return updated
        text = updated
    return text


def _clean_artifacts_once(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    # HTML the optimizer sometimes echoes back from the crawled page
    text = _BR_RE.sub("\n", text)
    text = _HTML_HEADING_RE.sub(lambda m: f"\n[H{m.group(1)}] ", text)
    text = _HTML_LIST_ITEM_RE.sub("\n" + BULLET_GLYPH, text)
    text = _HTML_BLOCK_RE.sub("\n", text)
    text = _HTML_TAG_RE.sub("", text)
    text = html.unescape(text)
    text = ftfy.fix_text(text)

    # Markdown decoration
    text = _HR_LINE_RE.sub("", text)
    text = _MD_IMAGE_RE.sub("", text)
    text = _MD_LINK_RE.sub(r"\1", text)
    text = _ESCAPED_PUNCT_RE.sub(r"\1", text)

    return _CTA_LINE_RE.sub("", text)


def clean_artifacts(text: str) -> str:
    """
    Strip decorative LLM artifacts.

    Repairs mojibake, unifies line endings, drops HTML tags (headings and
    list items become structural markers), removes Markdown images and
    backslash escapes, turns Markdown links into their label and
    removes "Get a Quote" style call-to-action lines.
    """
    return _until_stable(_clean_artifacts_once, text)


def rewrite_structural_markers(text: str) -> str:
    """
    Rewrite every heading spelling into [H1]/[H2]/[H3] on its own line.

    Handles lowercase or padded tags ("[ h2 ]"), [H4]-[H6] (folded into
    [H3]), Markdown "#" headings and bracket-less "H2 Title" prefixes. A
    bare prefix mid-line only counts after a sentence end.
    Any structural tag not at the start of a line is moved to a new line.
    """
    text = _BRACKET_TAG_RE.sub(lambda m: f"[{m.group(1).upper()}]", text)
    text = _DEEP_HEADING_RE.sub("[H3]", text)
    text = _MD_HEADING_RE.sub(lambda m: f"[H{min(len(m.group(1)), 3)}] ", text)
    text = _BARE_LINE_START_RE.sub(r"[\1] ", text)
    text = _BARE_MID_LINE_RE.sub(r"[\1] ", text)
    text = _TAG_SPACING_RE.sub(r"\1 ", text)
    text = _TAG_THEN_HASHES_RE.sub(r"\1 ", text)
    text = _DANGLING_HEADING_RE.sub(r"\1 ", text)
    return _TAG_MID_LINE_RE.sub("\n", text)


def collapse_block_markers(text: str) -> str:
    """
    Drop [PARA] markers and turn bullet markers into the bullet glyph.

    Paragraph boundaries are implied by line breaks, so [PARA] carries no
    information once every block sits on its own line.
    """
    text = _PARA_RE.sub("", text)
    text = _BULLET_TAG_RE.sub(BULLET_GLYPH, text)
    return _MD_BULLET_RE.sub(BULLET_GLYPH, text)


def strip_new_sentinels(text: str) -> str:
    """Remove [[NEW]] and [[NEW ...]] sentinels; they have no visible content."""
    return remove_new_sentinels(text)


def canonicalize_change_markers(text: str) -> str:
    """Respell change markers as [[KEYWORD: X]] / [[ADJUSTED: A → B]]."""
    return replace_markers(text, lambda marker: marker.canonical())


def repair_marker_spacing(text: str) -> str:
    """
    Separate change markers from words they were glued onto.

    "years,[[KEYWORD: AIM Insurance]]has" becomes
    "years, [[KEYWORD: AIM Insurance]] has".
    """
    text = _OPEN_NEEDS_SPACE_RE.sub(" ", text)
    return _CLOSE_NEEDS_SPACE_RE.sub("]] ", text)


def remove_orphan_lines(text: str) -> str:
    """Remove lines that hold nothing but a bare URL or an image."""
    return _ORPHAN_LINE_RE.sub("", text)


def collapse_whitespace(text: str) -> str:
    """
    Collapse runs of spaces, trim lines and allow at most one blank line.

    Also trims the text as a whole.
    """
    text = _INLINE_SPACE_RE.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text)
    return text.strip()


NORMALIZATION_STAGES: tuple[Callable[[str], str], ...] = (
    clean_artifacts,
    rewrite_structural_markers,
    collapse_block_markers,
    strip_new_sentinels,
    canonicalize_change_markers,
    repair_marker_spacing,
    remove_orphan_lines,
    collapse_whitespace,
)


def _run_stages(text: str) -> str:
    for stage in NORMALIZATION_STAGES:
        text = stage(text)
    return text


def normalize(raw: str) -> str:
    """
    Rewrite raw annotated text into canonical marker form.

    Pure and idempotent: normalize(normalize(x)) == normalize(x).

    Args:
        raw: Raw text returned by the content optimizer. None is treated as
            an empty string.

    Returns:
        Normalized text.
    """
    if not raw:
        return ""

    text = _until_stable(_run_stages, raw)
    logger.debug(f"Normalized {len(raw)} chars of annotated text into {len(text)} chars")
    return text


STRUCTURAL_PREFIX_RE = re.compile(r"^(?:" + STRUCTURAL_TAG + r"|•)[ \t]*")
_ANY_STRUCTURAL_TAG_RE = re.compile(STRUCTURAL_TAG + r"[ \t]*")


def strip_structural_markers(text: str) -> str:
    """Remove structural tags and a leading bullet glyph from a single line."""
    if not text:
        return ""
    text = STRUCTURAL_PREFIX_RE.sub("", text.strip())
    return _ANY_STRUCTURAL_TAG_RE.sub("", text).strip()


def normalize_inline(raw: str) -> str:
    """
    Normalize a single-line field such as the optimizer's H1.

    Runs the full normalizer, then drops structural markers and joins any
    remaining lines with a space.
    """
    text = normalize(raw)
    lines = [strip_structural_markers(line) for line in text.split("\n")]
    return " ".join(line for line in lines if line)
