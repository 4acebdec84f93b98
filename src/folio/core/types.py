"""Core data types for folio."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from folio.core.dates import format_iso_utc
from folio.core.utils import slugify, word_count

# Front-matter keys recognized by the parser, in serialization order.
KNOWN_KEYS = ("title", "description", "publishedOn", "status", "coverImage", "tags", "slug")


class DocumentStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class CoverImage(BaseModel):
    url: str
    alt: str = ""

    @field_validator("url")
    @classmethod
    def _url_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "coverImage.url must not be empty"
            raise ValueError(msg)
        return value.strip()


class Document(BaseModel):
    """A single article: validated front-matter plus its Markdown body."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    body: str
    description: str = ""
    published_on: datetime | None = Field(default=None, alias="publishedOn")
    status: DocumentStatus = DocumentStatus.DRAFT
    cover_image: CoverImage | None = Field(default=None, alias="coverImage")
    tags: list[str] = Field(default_factory=list)
    slug: str | None = None
    source_path: Path | None = None
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("title", "body")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "must not be empty"
            raise ValueError(msg)
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [tag.strip() for tag in value.split(",") if tag.strip()]
        return value

    @property
    def is_published(self) -> bool:
        return self.status == DocumentStatus.PUBLISHED

    @property
    def resolved_slug(self) -> str:
        """Explicit slug, else the source file stem, else the title."""
        if self.slug:
            return slugify(self.slug)
        if self.source_path is not None:
            return slugify(self.source_path.stem)
        return slugify(self.title)

    @property
    def word_count(self) -> int:
        return word_count(self.body)

    def to_front_matter(self) -> dict[str, Any]:
        """Return the metadata mapping as it appears in a source file."""
        metadata: dict[str, Any] = {"title": self.title}
        if self.description:
            metadata["description"] = self.description
        if self.published_on is not None:
            metadata["publishedOn"] = format_iso_utc(self.published_on)
        metadata["status"] = self.status.value
        if self.cover_image is not None:
            metadata["coverImage"] = self.cover_image.model_dump()
        if self.tags:
            metadata["tags"] = list(self.tags)
        if self.slug:
            metadata["slug"] = self.slug
        metadata.update(self.extra)
        return metadata


@dataclass(frozen=True)
class Heading:
    level: int
    text: str
    anchor: str


@dataclass(frozen=True)
class BuildIssue:
    """A document that was skipped, and why."""

    source_path: Path | None
    kind: str
    message: str

    @classmethod
    def from_exception(cls, exc: Exception, source_path: Path | None = None) -> BuildIssue:
        path = getattr(exc, "source_path", None) or source_path
        message = getattr(exc, "message", None) or str(exc)
        return cls(source_path=path, kind=type(exc).__name__, message=message)


@dataclass
class RenderedDocument:
    document: Document
    html: str
    headings: list[Heading] = field(default_factory=list)
    summary: str = ""

    @property
    def slug(self) -> str:
        return self.document.resolved_slug


@dataclass
class BuildReport:
    """Outcome of loading or building a batch of documents."""

    rendered: list[str] = field(default_factory=list)
    skipped_drafts: list[str] = field(default_factory=list)
    issues: list[BuildIssue] = field(default_factory=list)
    output_dir: Path | None = None

    @property
    def ok(self) -> bool:
        return not self.issues

    def summary(self) -> str:
        return (
            f"{len(self.rendered)} rendered, {len(self.skipped_drafts)} drafts skipped, "
            f"{len(self.issues)} issue(s)"
        )
