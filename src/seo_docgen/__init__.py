"""
SEO DocGen

Turns the annotated output of an SEO content optimizer into a Word document:
- Normalizes the optimizer's inconsistent heading and change-marker syntax
- Strips footer boilerplate and duplicate H1 headings
- Renders keyword insertions and phrase adjustments as green highlights
"""

__version__ = "1.0.0"
__author__ = "SEO Content Optimizer Team"

from .config import DocumentStyle, PipelineConfig

from .errors import DocGenError, EmptyContentError, RequestValidationError

from .models import (
    Block,
    BlockKind,
    ChangeSummary,
    InlineRun,
    RenderedBlock,
    RenderedDocument,
)

# Change-marker grammar
from .markers import (
    AdjustedMarker,
    ChangeMarker,
    KeywordMarker,
    NewMarker,
    strip_change_markers,
    summarize_changes,
    tokenize,
)

# Pipeline stages
from .normalizer import NORMALIZATION_STAGES, normalize, normalize_inline
from .footer_filter import strip_footer
from .segmenter import segment
from .renderer import render, render_block
from .headings import HeadingRegistry, accept, heading_key
from .pipeline import build_document

# Document output
from .schemas import DocumentGenerationRequest
from .docx_writer import DocxWriter, generate_document, write_document
from .filename_generator import document_filename, generate_output_path

__all__ = [
    # Configuration
    "DocumentStyle",
    "PipelineConfig",
    # Errors
    "DocGenError",
    "EmptyContentError",
    "RequestValidationError",
    # Models
    "Block",
    "BlockKind",
    "ChangeSummary",
    "InlineRun",
    "RenderedBlock",
    "RenderedDocument",
    # Markers
    "AdjustedMarker",
    "ChangeMarker",
    "KeywordMarker",
    "NewMarker",
    "strip_change_markers",
    "summarize_changes",
    "tokenize",
    # Pipeline
    "NORMALIZATION_STAGES",
    "normalize",
    "normalize_inline",
    "strip_footer",
    "segment",
    "render",
    "render_block",
    "HeadingRegistry",
    "accept",
    "heading_key",
    "build_document",
    # Document output
    "DocumentGenerationRequest",
    "DocxWriter",
    "generate_document",
    "write_document",
    "document_filename",
    "generate_output_path",
]
