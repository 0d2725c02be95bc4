"""Tests for request schema parsing."""

import json

import pytest

from seo_docgen.errors import RequestValidationError
from seo_docgen.schemas import CrawledData, DocumentGenerationRequest, Settings


class TestDocumentGenerationRequest:
    """Tests for DocumentGenerationRequest."""

    def test_parses_camel_case(self, request_payload):
        """Test camelCase keys map onto snake_case fields."""
        request = DocumentGenerationRequest.from_json(json.dumps(request_payload))

        content = request.analysis_result.optimized_content
        assert content.meta_title.startswith("Professional Liability Insurance")
        assert content.faqs[0].answer == "Any consultant who gives paid advice."
        assert content.schema_recommendations[0].type == "InsuranceAgency"
        assert request.analysis_result.keywords.nlp_terms[0] == "term 0"
        assert request.analysis_result.crawled_data.word_count == 420
        assert request.settings.brand_name == "AIM Insurance"

    def test_accepts_field_names(self):
        """Test snake_case field names are accepted too."""
        request = DocumentGenerationRequest.model_validate({
            "analysis_result": {"optimized_content": {"full_content": "Text."}},
            "client_name": "Acme",
        })

        assert request.analysis_result.optimized_content.full_content == "Text."
        assert request.client_name == "Acme"

    def test_defaults(self):
        """Test optional sections get defaults."""
        request = DocumentGenerationRequest.from_json(
            '{"analysisResult": {"optimizedContent": {"fullContent": "Text."}}}'
        )

        assert request.client_name == "Client"
        assert request.page_name == "Page"
        assert request.settings.include_schema_recommendations
        assert request.settings.title_max_length == 60
        assert request.analysis_result.keywords.primary == []

    def test_unknown_keys_ignored(self, request_payload):
        """Test extra keys from newer clients do not fail parsing."""
        request_payload["analysisResult"]["extraField"] = {"x": 1}

        request = DocumentGenerationRequest.model_validate(request_payload)

        assert request.client_name == "Acme Insurance"

    def test_document_title(self, sample_request):
        """Test the document title format."""
        assert sample_request.document_title == "Acme Insurance - Consultants | Content Improvement"

    def test_document_title_blank_names(self, sample_request):
        """Test blank names fall back to the defaults."""
        sample_request.client_name = " "
        sample_request.page_name = ""

        assert sample_request.document_title == "Client - Page | Content Improvement"

    def test_to_json_uses_camel_case(self, sample_request):
        """Test serialization uses the wire keys."""
        data = json.loads(sample_request.to_json())

        assert "analysisResult" in data
        assert "fullContent" in data["analysisResult"]["optimizedContent"]
        assert data["clientName"] == "Acme Insurance"


class TestRequestErrors:
    """Tests for request validation errors."""

    def test_malformed_json(self):
        """Test malformed JSON raises RequestValidationError."""
        with pytest.raises(RequestValidationError):
            DocumentGenerationRequest.from_json("{not json")

    def test_missing_optimized_content(self):
        """Test a request without optimized content is rejected."""
        with pytest.raises(RequestValidationError):
            DocumentGenerationRequest.from_json('{"analysisResult": {}}')

    def test_invalid_tone(self, request_payload):
        """Test an unknown tone is rejected."""
        request_payload["settings"]["tone"] = "sarcastic"

        with pytest.raises(RequestValidationError):
            DocumentGenerationRequest.from_json(json.dumps(request_payload))

    def test_missing_file(self, tmp_path):
        """Test an unreadable file raises RequestValidationError."""
        with pytest.raises(RequestValidationError):
            DocumentGenerationRequest.from_file(tmp_path / "missing.json")

    def test_from_file(self, request_json_file):
        """Test loading a request from disk."""
        request = DocumentGenerationRequest.from_file(request_json_file)

        assert request.page_name == "Consultants"


class TestCrawledData:
    """Tests for CrawledData helpers."""

    def test_current_h1(self):
        """Test the first H1 is reported."""
        assert CrawledData(h1=["First", "Second"]).current_h1 == "First"

    def test_current_h1_missing(self):
        """Test pages without an H1 report None."""
        assert CrawledData().current_h1 is None
        assert CrawledData(h1=["  "]).current_h1 is None

    def test_settings_from_camel_case(self):
        """Test settings parse from camelCase."""
        settings = Settings.model_validate({"includeSchemaRecommendations": False})

        assert not settings.include_schema_recommendations
