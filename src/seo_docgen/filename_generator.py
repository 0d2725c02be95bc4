"""
Filename generation for content improvement documents.

Generates download filenames from the client and page names:
    "Acme Corp", "About Us" -> "Acme_Corp_About_Us_Improvement.docx"
"""

import re
from pathlib import Path
from typing import Optional

from .schemas import DocumentGenerationRequest

# Anything outside this set is replaced with an underscore
_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9_-]")


def document_filename(client_name: Optional[str], page_name: Optional[str]) -> str:
    """
    Generate the download filename for a client page.

    Args:
        client_name: Client name. Blank falls back to 'SEO'.
        page_name: Page name. Blank falls back to 'Content'.

    Returns:
        Filename with .docx extension.

    Examples:
        >>> document_filename("Acme Corp", "About Us")
        'Acme_Corp_About_Us_Improvement.docx'

        >>> document_filename("", "")
        'SEO_Content_Improvement.docx'
    """
    client = (client_name or "").strip() or "SEO"
    page = (page_name or "").strip() or "Content"
    stem = _sanitize(f"{client}_{page}_Improvement")
    return f"{stem}.docx"


def _sanitize(stem: str) -> str:
    """Replace every filename-unsafe character with an underscore."""
    return _UNSAFE_CHARS_RE.sub("_", stem)


def generate_output_path(
    request: DocumentGenerationRequest,
    output_dir: Optional[Path] = None,
) -> Path:
    """
    Generate the output path for a request's document.

    Args:
        request: Document generation request.
        output_dir: Optional output directory. Defaults to current directory.

    Returns:
        Path object for the output file.
    """
    output_dir = Path(output_dir) if output_dir else Path.cwd()
    return output_dir / document_filename(request.client_name, request.page_name)
