"""Data models used across the backend.

Database table definitions are in database.py.
API request/response bodies live in schemas.py. The audit types here are
frozen pydantic models: one RawData is produced per audit and every Check,
Section and AuditResult is built once and never mutated.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

CheckStatus = Literal["pass", "warning", "fail"]


class AuditModel(BaseModel):
    """Immutable model that serializes with camelCase keys."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class Heading(AuditModel):
    tag: str
    text: str

    @property
    def level(self) -> int:
        return int(self.tag[1])


class Image(AuditModel):
    src: str
    alt: str | None = None


class Link(AuditModel):
    href: str
    is_external: bool = False


class RawData(AuditModel):
    """Facts pulled from one HTML document."""

    title: str | None = None
    meta_description: str | None = None
    canonical: str | None = None
    robots: str | None = None
    og_title: str | None = None
    og_description: str | None = None
    og_image: str | None = None
    og_url: str | None = None
    twitter_card: str | None = None
    twitter_title: str | None = None
    twitter_description: str | None = None
    headings: tuple[Heading, ...] = ()
    images: tuple[Image, ...] = ()
    links: tuple[Link, ...] = ()
    viewport: str | None = None
    charset: str | None = None
    lang: str | None = None
    inline_style_count: int = Field(default=0, ge=0)
    script_count: int = Field(default=0, ge=0)


class Check(AuditModel):
    """One scored rule."""

    label: str
    status: CheckStatus
    value: str
    recommendation: str = ""
    points: int | float
    max_points: int | float

    @model_validator(mode="after")
    def points_within_bounds(self) -> "Check":
        if not 0 <= self.points <= self.max_points:
            raise ValueError(f"points {self.points} outside 0..{self.max_points} for {self.label!r}")
        return self


class Section(AuditModel):
    name: str
    score: int | float
    max_score: int | float
    checks: tuple[Check, ...]


class AuditResult(AuditModel):
    url: str
    analyzed_at: datetime
    overall_score: int = Field(ge=0, le=100)
    sections: tuple[Section, ...]
    raw_data: RawData
