"""Tests for configuration dataclasses."""

import pytest

from seo_docgen.config import DocumentStyle, PipelineConfig


class TestPipelineConfig:
    """Tests for PipelineConfig."""

    def test_defaults(self):
        """Test default settings."""
        config = PipelineConfig()

        assert config.strip_footer
        assert config.footer_window_ratio == 0.15
        assert config.footer_short_line_max == 20
        assert config.demote_extra_h1

    @pytest.mark.parametrize("ratio", [-0.1, 1.5])
    def test_invalid_window_ratio(self, ratio):
        """Test the window ratio must be a fraction."""
        with pytest.raises(ValueError):
            PipelineConfig(footer_window_ratio=ratio)

    def test_negative_line_max(self):
        """Test the label length limit cannot be negative."""
        with pytest.raises(ValueError):
            PipelineConfig(footer_short_line_max=-1)


class TestDocumentStyle:
    """Tests for DocumentStyle."""

    def test_heading_sizes(self):
        """Test heading sizes and the body-size fallback."""
        style = DocumentStyle()

        assert style.heading_size(1) == 16
        assert style.heading_size(2) == 14
        assert style.heading_size(6) == style.body_size

    def test_instances_do_not_share_dicts(self):
        """Test mutable defaults are per instance."""
        first = DocumentStyle()
        second = DocumentStyle()
        first.heading_sizes[1] = 30

        assert second.heading_size(1) == 16
