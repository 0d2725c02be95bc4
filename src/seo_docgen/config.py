# -*- coding: utf-8 -*-
"""
Centralized configuration for the SEO content document generator.

Two dataclasses control behavior:
- PipelineConfig: how annotated LLM text is filtered and structured.
- DocumentStyle: fonts, sizes and colours used by the Word writer.
"""

from dataclasses import dataclass, field


@dataclass
class PipelineConfig:
    """
    Configuration for the annotated-content pipeline.

    Attributes:
        strip_footer: Run the footer filter after normalization.
        footer_window_ratio: Fraction of trailing lines treated as the
            footer window for the short-link-label heuristic.
        footer_short_line_max: Lines at or above this length are never
            treated as footer navigation labels.
        demote_extra_h1: Once a level-1 heading has been emitted, render
            further distinct level-1 body headings as level 2 so the
            document keeps a single top-level heading.
    """

    strip_footer: bool = True
    footer_window_ratio: float = 0.15
    footer_short_line_max: int = 20
    demote_extra_h1: bool = True

    def __post_init__(self) -> None:
        if not 0.0 <= self.footer_window_ratio <= 1.0:
            raise ValueError(
                f"footer_window_ratio must be between 0 and 1, got {self.footer_window_ratio}"
            )
        if self.footer_short_line_max < 0:
            raise ValueError("footer_short_line_max must not be negative")


@dataclass
class DocumentStyle:
    """
    Visual settings for the generated Word document.

    Sizes are in points. Colours are hex RGB strings without '#'.
    """

    font_name: str = "Arial"
    body_size: int = 12
    title_size: int = 28
    heading_sizes: dict[int, int] = field(
        default_factory=lambda: {1: 16, 2: 14, 3: 12}
    )
    heading_colors: dict[int, str] = field(
        default_factory=lambda: {1: "1A1A1A", 2: "333333", 3: "444444"}
    )
    section_label_color: str = "2563EB"
    label_shading: str = "F9CB9C"
    table_size: int = 11
    code_font_name: str = "Consolas"
    code_size: int = 9
    code_shading: str = "F3F4F6"
    max_nlp_terms: int = 10

    def heading_size(self, level: int) -> int:
        """Font size for a heading level, falling back to the body size."""
        return self.heading_sizes.get(level, self.body_size)
