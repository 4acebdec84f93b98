"""Core exceptions for folio."""

from __future__ import annotations

from pathlib import Path


class FolioError(Exception):
    """Base exception for all folio errors."""


class ConfigError(FolioError):
    """Raised when the configuration file cannot be loaded."""


class DocumentError(FolioError):
    """Base exception for documents that cannot be loaded.

    Carries the source path when the document came from a file so batch
    reports can point the operator at the offending file.
    """

    def __init__(self, message: str, source_path: Path | None = None) -> None:
        self.message = message
        self.source_path = source_path
        super().__init__(message)

    def __str__(self) -> str:
        if self.source_path is not None:
            return f"{self.source_path}: {self.message}"
        return self.message

    def with_source(self, source_path: Path) -> DocumentError:
        """Attach a source path if none was recorded yet."""
        if self.source_path is None:
            self.source_path = source_path
        return self


class MalformedFrontMatterError(DocumentError):
    """Raised when the front-matter block is missing, unreadable or incomplete."""


class InvalidStatusError(DocumentError):
    """Raised when the status is not one of the recognized values."""

    def __init__(self, status: object, source_path: Path | None = None) -> None:
        self.status = status
        super().__init__(f"Invalid status {status!r}; expected 'draft' or 'published'", source_path)


class UnparsableTimestampError(DocumentError):
    """Raised when publishedOn cannot be parsed as a timestamp."""

    def __init__(self, value: object, reason: str | None = None, source_path: Path | None = None) -> None:
        self.value = value
        message = f"Unparsable timestamp {value!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, source_path)


class EmptyBodyError(DocumentError):
    """Raised when a document has valid front-matter but no body text."""


class DuplicateSlugError(DocumentError):
    """Raised when two documents in one build resolve to the same slug."""

    def __init__(self, slug: str, first_path: Path | None, source_path: Path | None = None) -> None:
        self.slug = slug
        self.first_path = first_path
        super().__init__(f"Slug '{slug}' already used by {first_path}", source_path)


class ContentNotFoundError(FolioError):
    """Raised when the content directory does not exist."""

    def __init__(self, content_dir: Path) -> None:
        self.content_dir = content_dir
        super().__init__(f"Content directory not found: {content_dir}")
