"""
Pytest fixtures and configuration for SEO DocGen tests.
"""

import json
from pathlib import Path

import pytest

from seo_docgen.schemas import DocumentGenerationRequest


ANNOTATED_CONTENT = """[H1] Professional Liability Insurance for Consultants

For over 20 years,[[KEYWORD: AIM Insurance]]has protected consultants across the UK.

H2 Why Choose Us

[PARA] Our policies support [[ADJUSTED: teachers and educators → educators and teachers]] with [[KEYWORD: professional liability insurance]] tailored to their work. [[NEW]]

[BULLET] Fast quotes
[BULLET] Claims handled by [[KEYWORD: specialist advisors]]

## Get Covered Today

Call us to discuss your cover.

© 2024 AIM Insurance. All rights reserved.
Privacy Policy | Terms of Service
Contact Us
"""


@pytest.fixture
def annotated_content() -> str:
    """Raw optimizer output with every marker spelling the optimizer produces."""
    return ANNOTATED_CONTENT


@pytest.fixture
def request_payload() -> dict:
    """A document-generation request as the web client posts it (camelCase keys)."""
    return {
        "analysisResult": {
            "crawledData": {
                "url": "https://www.aiminsurance.co.uk/consultants",
                "title": "Consultant Insurance | AIM",
                "metaDescription": "Insurance for consultants.",
                "h1": ["Consultant Insurance"],
                "h2": ["Why Choose Us"],
                "bodyContent": "Consultant insurance from AIM.",
                "wordCount": 420,
            },
            "optimizedContent": {
                "metaTitle": "Professional Liability Insurance for Consultants | AIM",
                "metaDescription": "Protect your consultancy with [[KEYWORD: professional liability insurance]] from AIM.",
                "h1": "Professional Liability Insurance for Consultants",
                "fullContent": ANNOTATED_CONTENT,
                "faqs": [
                    {
                        "question": "Who needs [[KEYWORD: professional liability insurance]]?",
                        "answer": "Any consultant who gives paid advice.",
                    },
                ],
                "schemaRecommendations": [
                    {
                        "type": "InsuranceAgency",
                        "reason": "Describes the business behind the page.",
                        "jsonLd": '{"@context": "https://schema.org", "@type": "InsuranceAgency"}',
                    },
                ],
            },
            "keywords": {
                "primary": ["professional liability insurance"],
                "secondary": ["consultant insurance"],
                "nlpTerms": [f"term {i}" for i in range(12)],
            },
        },
        "settings": {
            "brandName": "AIM Insurance",
            "tone": "professional",
            "includeSchemaRecommendations": True,
        },
        "clientName": "Acme Insurance",
        "pageName": "Consultants",
    }


@pytest.fixture
def sample_request(request_payload: dict) -> DocumentGenerationRequest:
    """Parsed document-generation request."""
    return DocumentGenerationRequest.model_validate(request_payload)


@pytest.fixture
def request_json_file(tmp_path: Path, request_payload: dict) -> Path:
    """Request payload saved to a JSON file."""
    path = tmp_path / "request.json"
    path.write_text(json.dumps(request_payload), encoding="utf-8")
    return path
