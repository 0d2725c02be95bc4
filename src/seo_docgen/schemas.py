"""
Request models for document generation.

These mirror the JSON the web client posts to the document endpoint: the
crawled page, the optimizer output, the keyword set and the user settings.
Keys are camelCase on the wire and snake_case in Python.
"""

import json
from pathlib import Path
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .errors import RequestValidationError


class CamelModel(BaseModel):
    """Base model accepting camelCase keys or field names."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class SchemaMarkup(CamelModel):
    """A structured-data block found on the crawled page."""
    type: str
    data: dict[str, Any] = Field(default_factory=dict)


class ImageData(CamelModel):
    """An image found on the crawled page."""
    src: str
    alt: str = ""
    has_alt: bool = False


class CrawledData(CamelModel):
    """What the crawler extracted from the target page."""
    url: str = ""
    title: str = ""
    meta_description: str = ""
    h1: list[str] = Field(default_factory=list)
    h2: list[str] = Field(default_factory=list)
    h3: list[str] = Field(default_factory=list)
    h4: list[str] = Field(default_factory=list)
    h5: list[str] = Field(default_factory=list)
    h6: list[str] = Field(default_factory=list)
    body_content: str = ""
    schema_markup: list[SchemaMarkup] = Field(default_factory=list)
    canonical_url: str = ""
    og_title: str = ""
    og_description: str = ""
    word_count: int = 0
    internal_links: list[str] = Field(default_factory=list)
    external_links: list[str] = Field(default_factory=list)
    images: list[ImageData] = Field(default_factory=list)

    @property
    def current_h1(self) -> Optional[str]:
        """First H1 on the page, if any."""
        return self.h1[0] if self.h1 and self.h1[0].strip() else None


class KeywordData(CamelModel):
    """Target keywords grouped by role."""
    primary: list[str] = Field(default_factory=list)
    secondary: list[str] = Field(default_factory=list)
    nlp_terms: list[str] = Field(default_factory=list)
    questions: list[str] = Field(default_factory=list)
    long_tail: list[str] = Field(default_factory=list)
    all: list[str] = Field(default_factory=list)


class FAQ(CamelModel):
    """A generated question and answer."""
    question: str
    answer: str


class SchemaRecommendation(CamelModel):
    """A suggested structured-data addition."""
    type: str
    reason: str = ""
    json_ld: str = ""


class OptimizedContent(CamelModel):
    """Output of the content optimizer."""
    meta_title: str = ""
    meta_description: str = ""
    h1: str = ""
    full_content: str = ""
    faqs: list[FAQ] = Field(default_factory=list)
    schema_recommendations: list[SchemaRecommendation] = Field(default_factory=list)


class Settings(CamelModel):
    """User settings from the analysis form."""
    brand_name: str = ""
    title_max_length: int = 60
    description_max_length: int = 160
    tone: Literal["professional", "friendly", "authoritative"] = "professional"
    include_schema_recommendations: bool = True


class AnalysisResult(CamelModel):
    """Everything produced by one analysis run."""
    crawled_data: CrawledData = Field(default_factory=CrawledData)
    optimized_content: OptimizedContent
    keywords: KeywordData = Field(default_factory=KeywordData)
    # Scoring output is passed through untouched
    seo_analysis: Optional[dict[str, Any]] = None


class DocumentGenerationRequest(CamelModel):
    """Request to generate the content improvement document."""
    analysis_result: AnalysisResult
    settings: Settings = Field(default_factory=Settings)
    client_name: str = "Client"
    page_name: str = "Page"

    @classmethod
    def from_json(cls, payload: Union[str, bytes]) -> "DocumentGenerationRequest":
        """
        Parse a request from its JSON body.

        Raises:
            RequestValidationError: If the JSON is malformed or incomplete.
        """
        try:
            return cls.model_validate_json(payload)
        except ValidationError as e:
            raise RequestValidationError(f"Invalid document request: {e}") from e

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "DocumentGenerationRequest":
        """Load a request from a JSON file."""
        path = Path(path)
        try:
            payload = path.read_text(encoding="utf-8")
        except OSError as e:
            raise RequestValidationError(f"Cannot read request file {path}: {e}") from e
        return cls.from_json(payload)

    def to_json(self) -> str:
        """Serialize with camelCase keys."""
        return json.dumps(self.model_dump(by_alias=True), indent=2)

    @property
    def document_title(self) -> str:
        client = self.client_name.strip() or "Client"
        page = self.page_name.strip() or "Page"
        return f"{client} - {page} | Content Improvement"
