"""
Level-1 heading deduplication.

The optimizer returns the H1 twice: once in a dedicated field and often again
at the top of the body. A HeadingRegistry remembers every level-1 heading a
run has emitted so the second copy can be dropped.

A registry belongs to exactly one pipeline run. Create a new one per
document; never keep one at module level or share it across requests.
"""

import re

from .markers import strip_change_markers
from .normalizer import strip_structural_markers

_WHITESPACE_RE = re.compile(r"\s+")


def heading_key(text: str) -> str:
    """
    Comparison key for a heading.

    Change markers are replaced by their visible text, structural tags are
    removed, then the text is lowercased with whitespace collapsed.
    """
    if not text:
        return ""
    text = strip_change_markers(text)
    text = strip_structural_markers(text)
    return _WHITESPACE_RE.sub(" ", text).strip().lower()


class HeadingRegistry:
    """Set of heading keys already emitted in one document."""

    def __init__(self) -> None:
        self._keys: set[str] = set()

    def accept(self, heading_text: str) -> bool:
        """
        Register a heading and report whether it should be rendered.

        Returns:
            True the first time a heading key is seen, False for a duplicate
            or for a heading with no visible text.
        """
        key = heading_key(heading_text)
        if not key or key in self._keys:
            return False
        self._keys.add(key)
        return True

    def __contains__(self, heading_text: str) -> bool:
        key = heading_key(heading_text)
        return bool(key) and key in self._keys

    def __len__(self) -> int:
        return len(self._keys)


def accept(registry: HeadingRegistry, heading_text: str) -> bool:
    """Functional form of HeadingRegistry.accept."""
    return registry.accept(heading_text)
