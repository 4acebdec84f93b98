"""folio: parse, check and publish Markdown articles with YAML front-matter."""

from folio.core.exceptions import (
    DocumentError,
    FolioError,
    InvalidStatusError,
    MalformedFrontMatterError,
    UnparsableTimestampError,
)
from folio.core.frontmatter import (
    dump_document,
    load_document,
    parse_document,
    parse_front_matter,
    serialize_front_matter,
)
from folio.core.rendering import MarkdownRenderer, render_html
from folio.core.types import CoverImage, Document, DocumentStatus

__version__ = "0.1.0"

__all__ = [
    "CoverImage",
    "Document",
    "DocumentError",
    "DocumentStatus",
    "FolioError",
    "InvalidStatusError",
    "MalformedFrontMatterError",
    "MarkdownRenderer",
    "UnparsableTimestampError",
    "dump_document",
    "load_document",
    "parse_document",
    "parse_front_matter",
    "render_html",
    "serialize_front_matter",
]
