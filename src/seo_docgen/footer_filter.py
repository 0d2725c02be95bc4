"""
Footer boilerplate removal.

The crawled body text often ends with the site footer (copyright line,
policy links, navigation labels) and the optimizer tends to carry it over.
Two rules apply:

1. Anywhere in the text: copyright notices and non-bullet lines made only
   of policy link labels ("Privacy Policy | Terms of Service") are removed.
   A lone generic label ("Sitemap") is left to the second rule.
2. Only in the trailing window (last 15% of lines by default): short lines
   that look like capitalized navigation labels ("Contact Us", "About")
   are removed. Short lines earlier in the text are legitimate content.
"""

import logging
import math
import re
from typing import Optional

from .config import PipelineConfig
from .markers import strip_change_markers
from .normalizer import collapse_whitespace

logger = logging.getLogger(__name__)

COPYRIGHT_PATTERNS = [
    r"©",
    r"\(c\)\s*(?:19|20)\d{2}",
    r"^\W*copyright\b",
    r"\ball rights reserved\b",
]

POLICY_LABELS = [
    "privacy policy",
    "privacy notice",
    "terms of service",
    "terms of use",
    "terms and conditions",
    "terms & conditions",
    "cookie policy",
]

# Only count as footer links next to at least one other label
GENERIC_LINK_LABELS = [
    "cookie settings",
    "accessibility statement",
    "accessibility",
    "sitemap",
    "site map",
    "legal notice",
    "disclaimer",
]

_COPYRIGHT_RE = re.compile("|".join(COPYRIGHT_PATTERNS), re.IGNORECASE)

# Longest labels first so "privacy policy" wins over shorter overlaps
_ALL_LABELS = sorted(POLICY_LABELS + GENERIC_LINK_LABELS, key=len, reverse=True)
_POLICY_LABEL_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(label) for label in _ALL_LABELS) + r")\b",
    re.IGNORECASE,
)
_LABEL_SEPARATORS_RE = re.compile(r"[\s|·/,\-–—]+")

# Every word capitalized, letters and digits only
_NAV_LABEL_RE = re.compile(r"^[A-Z0-9][A-Za-z0-9]*(?: [A-Z0-9][A-Za-z0-9]*)*$")

_HEADING_LINE_RE = re.compile(r"^\[H[1-3]\]")
_BULLET_LINE_RE = re.compile(r"^(?:•|\[BULLET\])")


def is_copyright_line(line: str) -> bool:
    """Check if a line is a copyright notice."""
    return bool(_COPYRIGHT_RE.search(line))


def is_policy_links_line(line: str) -> bool:
    """
    Check if a line consists only of policy link labels.

    "Privacy Policy | Terms of Service" and "Sitemap | Accessibility"
    qualify. A lone generic label such as "Sitemap" or "Disclaimer" does
    not, nor does a bullet or a sentence that merely mentions the privacy
    policy.
    """
    stripped = line.strip()
    if _BULLET_LINE_RE.match(stripped):
        return False

    labels = [m.group(0).lower() for m in _POLICY_LABEL_RE.finditer(stripped)]
    if not labels:
        return False
    remainder = _POLICY_LABEL_RE.sub("", stripped)
    if _LABEL_SEPARATORS_RE.sub("", remainder):
        return False
    return len(labels) >= 2 or labels[0] in POLICY_LABELS


def is_boilerplate_line(line: str) -> bool:
    """Check if a line is footer boilerplate wherever it appears."""
    plain = strip_change_markers(line).strip()
    if not plain:
        return False
    return is_copyright_line(plain) or is_policy_links_line(plain)


def looks_like_nav_label(line: str, max_length: int = 20) -> bool:
    """
    Check if a line looks like a footer navigation link label.

    Headings and bullets are never treated as labels.
    """
    stripped = line.strip()
    if not stripped or len(stripped) >= max_length:
        return False
    if _HEADING_LINE_RE.match(stripped) or _BULLET_LINE_RE.match(stripped):
        return False
    return bool(_NAV_LABEL_RE.match(stripped))


def strip_footer(text: str, config: Optional[PipelineConfig] = None) -> str:
    """
    Remove footer boilerplate from normalized text.

    Args:
        text: Normalized annotated text.
        config: Pipeline configuration (window ratio and label length).

    Returns:
        Normalized text without footer lines.
    """
    if not text:
        return ""

    config = config or PipelineConfig()
    lines = text.split("\n")

    window_start = len(lines) - math.ceil(len(lines) * config.footer_window_ratio)

    kept = []
    removed = 0
    for index, line in enumerate(lines):
        if is_boilerplate_line(line):
            removed += 1
            continue
        if index >= window_start and looks_like_nav_label(line, config.footer_short_line_max):
            removed += 1
            continue
        kept.append(line)

    if removed:
        logger.debug(f"Footer filter removed {removed} line(s)")

    return collapse_whitespace("\n".join(kept))
