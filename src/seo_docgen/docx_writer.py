"""
Word document writer with green highlight support.

This module generates the content improvement .docx with:
- Document title "<client> - <page> | Content Improvement"
- The optimized content with keyword insertions and adjustments
  highlighted in bright green
- FAQ and schema markup recommendation sections
- A metadata table (target keywords, URL, title tag, meta description, H1)
"""

import io
import json
import logging
import re
from pathlib import Path
from typing import Optional, Union

from docx import Document
from docx.enum.table import WD_TABLE_ALIGNMENT
from docx.enum.text import WD_COLOR_INDEX
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor, Twips
from docx.text.paragraph import Paragraph

from .config import DocumentStyle, PipelineConfig
from .markers import strip_change_markers
from .models import BlockKind, InlineRun, RenderedBlock, RenderedDocument
from .normalizer import normalize_inline
from .pipeline import build_document
from .renderer import render
from .schemas import (
    FAQ,
    DocumentGenerationRequest,
    SchemaRecommendation,
)

logger = logging.getLogger(__name__)

HIGHLIGHT_COLOR = WD_COLOR_INDEX.BRIGHT_GREEN

# Column widths from the original layout: labels ~30%, values ~70%
LABEL_COLUMN_WIDTH = Twips(2800)
VALUE_COLUMN_WIDTH = Twips(6560)

# Regex pattern for invalid XML 1.0 characters
# Valid XML 1.0 chars: #x9 | #xA | #xD | [#x20-#xD7FF] | [#xE000-#xFFFD] | [#x10000-#x10FFFF]
_INVALID_XML_CHARS_RE = re.compile(
    r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]"
)


def sanitize_for_xml(text: str) -> str:
    """
    Remove invalid XML characters from text to prevent Word "unreadable content" errors.

    Args:
        text: Input text that may contain invalid XML characters.

    Returns:
        Sanitized text safe for XML/DOCX.
    """
    if not text:
        return text
    return _INVALID_XML_CHARS_RE.sub("", text)


def _shading_element(color: str):
    shd = OxmlElement("w:shd")
    shd.set(qn("w:val"), "clear")
    shd.set(qn("w:color"), "auto")
    shd.set(qn("w:fill"), color)
    return shd


def set_cell_shading(cell, color: str) -> None:
    """Set background color/shading for a table cell."""
    tcPr = cell._tc.get_or_add_tcPr()
    tcPr.append(_shading_element(color))


def set_paragraph_shading(paragraph: Paragraph, color: str) -> None:
    """Set background shading for a whole paragraph."""
    pPr = paragraph._p.get_or_add_pPr()
    pPr.append(_shading_element(color))


def add_runs(
    paragraph: Paragraph,
    runs: list[InlineRun],
    bold: Optional[bool] = None,
    size: Optional[int] = None,
) -> None:
    """
    Write rendered runs into a paragraph.

    Highlighted runs get the bright green highlight; plain runs are left
    unhighlighted. Runs rendered from **emphasis** are always bold. Text is
    sanitized for XML before insertion.

    Args:
        paragraph: The paragraph to add text to.
        runs: Runs produced by the renderer.
        bold: Optional bold setting for every non-emphasis run.
        size: Optional font size in points for every run.
    """
    for inline in runs:
        text = sanitize_for_xml(inline.text)
        if not text:
            continue
        run = paragraph.add_run(text)
        if bold is not None or inline.bold:
            run.font.bold = bool(bold) or inline.bold
        if size is not None:
            run.font.size = Pt(size)
        if inline.highlighted:
            run.font.highlight_color = HIGHLIGHT_COLOR


def add_marked_text(
    paragraph: Paragraph,
    text: str,
    bold: Optional[bool] = None,
    size: Optional[int] = None,
) -> None:
    """
    Write annotated text (change markers inline) into a paragraph.

    Used for single-line fields such as FAQ questions and answers.
    """
    add_runs(paragraph, render(normalize_inline(text)), bold=bold, size=size)


class DocxWriter:
    """
    Writes the content improvement document for one request.

    A writer builds a fresh python-docx Document on every call, so one
    instance may be reused sequentially but should not be shared between
    concurrent requests.
    """

    def __init__(
        self,
        style: Optional[DocumentStyle] = None,
        pipeline_config: Optional[PipelineConfig] = None,
    ):
        """
        Initialize the document writer.

        Args:
            style: Fonts, sizes and colours. Defaults to DocumentStyle().
            pipeline_config: Configuration for the annotated-content pipeline.
        """
        self.style = style or DocumentStyle()
        self.pipeline_config = pipeline_config or PipelineConfig()
        self.doc = Document()
        self.rendered: Optional[RenderedDocument] = None

    def _setup_styles(self) -> None:
        """Configure document font, heading styles and page margins."""
        style = self.style

        normal_style = self.doc.styles["Normal"]
        normal_style.font.name = style.font_name
        normal_style.font.size = Pt(style.body_size)
        # Set font for East Asian text fallback (required for proper font embedding)
        normal_style.element.get_or_add_rPr().get_or_add_rFonts().set(
            qn("w:eastAsia"), style.font_name
        )

        if "Title" in self.doc.styles:
            title_style = self.doc.styles["Title"]
            title_style.font.name = style.font_name
            title_style.font.size = Pt(style.title_size)
            title_style.font.bold = True
            title_style.paragraph_format.space_after = Pt(20)

        heading_space = {1: (12, 6), 2: (10, 5), 3: (8, 4)}
        for level in (1, 2, 3):
            style_name = f"Heading {level}"
            if style_name not in self.doc.styles:
                continue
            heading_style = self.doc.styles[style_name]
            heading_style.font.name = style.font_name
            heading_style.font.size = Pt(style.heading_size(level))
            heading_style.font.bold = True
            heading_style.font.color.rgb = RGBColor.from_string(style.heading_colors[level])
            before, after = heading_space[level]
            heading_style.paragraph_format.space_before = Pt(before)
            heading_style.paragraph_format.space_after = Pt(after)

        for list_style_name in ("List Bullet", "List Number"):
            if list_style_name in self.doc.styles:
                list_style = self.doc.styles[list_style_name]
                list_style.font.name = style.font_name
                list_style.font.size = Pt(style.body_size)
                list_style.paragraph_format.space_after = Pt(4)

        for section in self.doc.sections:
            section.top_margin = Inches(1)
            section.bottom_margin = Inches(1)
            section.left_margin = Inches(1)
            section.right_margin = Inches(1)

    def compose(self, request: DocumentGenerationRequest) -> RenderedDocument:
        """
        Build the whole document in memory.

        Returns:
            The rendered body, for callers that want to report on it.

        Raises:
            EmptyContentError: If the optimized content is empty.
        """
        analysis = request.analysis_result
        content = analysis.optimized_content

        # Render first so empty content fails before any document work
        rendered = build_document(content.full_content, content.h1, config=self.pipeline_config)

        self.doc = Document()
        self._setup_styles()

        title_para = self.doc.add_paragraph(style="Title")
        title_para.add_run(sanitize_for_xml(request.document_title))

        self.doc.add_heading("Web Page - Meta Data", level=2)
        self._add_section_label("NEW CONTENT")

        self._add_rendered_document(rendered)

        if content.faqs:
            self._add_faq_section(content.faqs)

        if request.settings.include_schema_recommendations and content.schema_recommendations:
            self._add_schema_section(content.schema_recommendations)

        self.doc.add_paragraph()
        self._add_metadata_table(request)

        self.rendered = rendered
        return rendered

    def write(
        self,
        request: DocumentGenerationRequest,
        output_path: Union[str, Path],
    ) -> Path:
        """
        Write the document for a request to disk.

        Args:
            request: Document generation request.
            output_path: Path for the output .docx file.

        Returns:
            Path to the created document.
        """
        output_path = Path(output_path)

        # Ensure .docx extension
        if output_path.suffix.lower() != ".docx":
            output_path = output_path.with_suffix(".docx")

        self.compose(request)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.doc.save(str(output_path))
        logger.info(f"Wrote document to {output_path}")

        return output_path

    def to_bytes(self, request: DocumentGenerationRequest) -> bytes:
        """Build the document for a request and return the .docx bytes."""
        self.compose(request)
        buffer = io.BytesIO()
        self.doc.save(buffer)
        return buffer.getvalue()

    def _add_section_label(self, text: str) -> None:
        para = self.doc.add_paragraph()
        run = para.add_run(text)
        run.font.bold = True
        run.font.size = Pt(self.style.heading_size(2))
        run.font.color.rgb = RGBColor.from_string(self.style.section_label_color)

    def _add_rendered_document(self, rendered: RenderedDocument) -> None:
        """Add the title heading and every body block."""
        if rendered.title is not None:
            self._add_block(rendered.title)
        for block in rendered.blocks:
            self._add_block(block)

    def _add_block(self, block: RenderedBlock) -> None:
        if block.kind.is_heading:
            heading = self.doc.add_heading(level=block.kind.heading_level)
            add_runs(heading, block.runs)
        elif block.kind is BlockKind.BULLET:
            style = "List Number" if block.ordered else "List Bullet"
            para = self.doc.add_paragraph(style=style)
            add_runs(para, block.runs)
        else:
            para = self.doc.add_paragraph()
            add_runs(para, block.runs)

    def _add_faq_section(self, faqs: list[FAQ]) -> None:
        """Add the FAQ section."""
        self.doc.add_heading("Frequently Asked Questions", level=2)

        for faq in faqs:
            q_para = self.doc.add_paragraph()
            q_para.add_run("Q: ").font.bold = True
            add_marked_text(q_para, faq.question, bold=True)
            q_para.paragraph_format.space_before = Pt(10)

            a_para = self.doc.add_paragraph()
            a_para.add_run("A: ")
            add_marked_text(a_para, faq.answer)
            a_para.paragraph_format.left_indent = Inches(0.25)

    def _add_schema_section(self, recommendations: list[SchemaRecommendation]) -> None:
        """Add schema recommendations with their JSON-LD as shaded code lines."""
        self.doc.add_heading("Schema Markup Recommendations", level=2)

        for rec in recommendations:
            type_para = self.doc.add_paragraph()
            type_para.add_run(sanitize_for_xml(rec.type)).font.bold = True

            if rec.reason:
                reason_run = self.doc.add_paragraph().add_run(sanitize_for_xml(rec.reason))
                reason_run.font.italic = True
                reason_run.font.size = Pt(self.style.body_size - 1)

            for line in format_json_ld(rec.json_ld).split("\n"):
                code_para = self.doc.add_paragraph()
                code_para.paragraph_format.space_before = Pt(0)
                code_para.paragraph_format.space_after = Pt(0)
                set_paragraph_shading(code_para, self.style.code_shading)
                code_run = code_para.add_run(sanitize_for_xml(line))
                code_run.font.name = self.style.code_font_name
                code_run.font.size = Pt(self.style.code_size)

    def _add_metadata_table(self, request: DocumentGenerationRequest) -> None:
        """Add the two-column metadata table with shaded label cells."""
        analysis = request.analysis_result
        crawled = analysis.crawled_data
        content = analysis.optimized_content
        keywords = analysis.keywords

        meta_title = strip_change_markers(content.meta_title).strip()
        meta_description = strip_change_markers(content.meta_description).strip()
        new_h1 = strip_change_markers(normalize_inline(content.h1))

        keyword_text = "\n".join(keywords.primary + keywords.secondary)
        if keywords.nlp_terms:
            nlp_terms = keywords.nlp_terms[: self.style.max_nlp_terms]
            keyword_text += "\n\nNLP:\n" + "\n".join(nlp_terms)

        table = self.doc.add_table(rows=0, cols=2)
        table.style = "Table Grid"
        table.alignment = WD_TABLE_ALIGNMENT.LEFT

        self._add_metadata_row(table, "Target Keyword(s)", keyword_text)
        self._add_metadata_row(
            table, "Target Page URL", crawled.url, color=self.style.section_label_color
        )
        self._add_metadata_row(
            table, "Updated Title Tag", f"{meta_title} ({len(meta_title)} chars)"
        )
        self._add_metadata_row(
            table,
            "Updated Meta Description",
            f"{meta_description} ({len(meta_description)} chars)",
        )
        current_h1 = crawled.current_h1
        self._add_metadata_row(
            table, "Current H1", current_h1 or "No H1 found", italic=current_h1 is None
        )
        self._add_metadata_row(table, "New H1", new_h1)

    def _add_metadata_row(
        self,
        table,
        label: str,
        value: str,
        color: Optional[str] = None,
        italic: bool = False,
    ) -> None:
        label_cell, value_cell = table.add_row().cells
        label_cell.width = LABEL_COLUMN_WIDTH
        value_cell.width = VALUE_COLUMN_WIDTH

        label_run = label_cell.paragraphs[0].add_run(label)
        label_run.font.bold = True
        label_run.font.size = Pt(self.style.table_size)
        set_cell_shading(label_cell, self.style.label_shading)

        value_run = value_cell.paragraphs[0].add_run(sanitize_for_xml(value))
        value_run.font.size = Pt(self.style.table_size)
        value_run.font.italic = italic
        if color:
            value_run.font.color.rgb = RGBColor.from_string(color)


def format_json_ld(json_ld: str) -> str:
    """Pretty-print JSON-LD; unparseable input is returned unchanged."""
    try:
        return json.dumps(json.loads(json_ld), indent=2)
    except (json.JSONDecodeError, TypeError):
        return json_ld


def generate_document(
    request: DocumentGenerationRequest,
    style: Optional[DocumentStyle] = None,
    pipeline_config: Optional[PipelineConfig] = None,
) -> bytes:
    """
    Convenience function returning the .docx bytes for a request.

    Args:
        request: Document generation request.
        style: Optional document style.
        pipeline_config: Optional pipeline configuration.

    Returns:
        The serialized Word document.
    """
    writer = DocxWriter(style=style, pipeline_config=pipeline_config)
    return writer.to_bytes(request)


def write_document(
    request: DocumentGenerationRequest,
    output_path: Union[str, Path],
) -> Path:
    """Convenience function to write the document for a request to disk."""
    return DocxWriter().write(request, output_path)
