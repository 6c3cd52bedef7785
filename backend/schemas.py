"""Pydantic schemas for API request/response."""

from pydantic import BaseModel, Field, field_validator


class AuditRequest(BaseModel):
    """Request body for the audit endpoints."""

    url: str = ""

    @field_validator("url", mode="before")
    @classmethod
    def normalize_url_field(cls, value: object) -> str:
        return str(value or "").strip()


class CreateProjectRequest(BaseModel):
    """Request body for POST /projects."""

    name: str
    website_url: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("Project name is required")
        return normalized[:200]

    @field_validator("website_url", mode="before")
    @classmethod
    def normalize_website_url(cls, value: object) -> str | None:
        text = str(value or "").strip()
        return text or None


class ProjectResponse(BaseModel):
    """Project with its last stored SEO audit."""

    id: int
    name: str
    website_url: str | None = None
    created_at: str
    audited_at: str | None = None
    seo_audit: dict | None = None


class ProjectHistoryItem(BaseModel):
    """Summary row for history list."""

    id: int
    name: str
    website_url: str | None = None
    overall_score: int | None = None
    created_at: str
    audited_at: str | None = None


class SectionSummary(BaseModel):
    """Per-section bar in the report."""

    name: str
    score: int | float
    max_score: int | float
    percent: int
    tone: str
    passed: int
    warnings: int
    failed: int


class SocialPreview(BaseModel):
    """Share card built from Open Graph data with title/description fallbacks."""

    title: str
    description: str
    image: str | None = None
    domain: str


class AuditReportResponse(BaseModel):
    """Dashboard view of a stored audit."""

    url: str
    analyzed_at: str
    overall_score: int = Field(ge=0, le=100)
    label: str
    tone: str
    sections: list[SectionSummary]
    social_preview: SocialPreview
