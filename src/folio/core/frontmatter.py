"""Parsing and serialization of YAML front-matter in Markdown documents."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

import frontmatter
import yaml
from pydantic import BaseModel, ValidationError

from folio.core.dates import format_iso_utc, parse_timestamp
from folio.core.exceptions import (
    DocumentError,
    EmptyBodyError,
    InvalidStatusError,
    MalformedFrontMatterError,
)
from folio.core.types import KNOWN_KEYS, Document, DocumentStatus

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

DELIMITER = "---"
_COVER_PREFIX = "coverImage."
_STATUS_VALUES = frozenset(status.value for status in DocumentStatus)


class _FrontMatterLoader(yaml.SafeLoader):
    """Safe loader that keeps out-of-range timestamps as plain strings."""


def _construct_timestamp(loader: _FrontMatterLoader, node: yaml.ScalarNode) -> Any:
    try:
        return loader.construct_yaml_timestamp(node)
    except (ValueError, OverflowError):
        # e.g. 2024-02-30: left for parse_timestamp to reject.
        return loader.construct_scalar(node)


_FrontMatterLoader.add_constructor("tag:yaml.org,2002:timestamp", _construct_timestamp)


def split_front_matter(text: str) -> tuple[str, str]:
    """Split raw document text into the front-matter region and the body.

    The first line must be the ``---`` delimiter and the region ends at the
    next ``---`` line. Leading blank lines and trailing whitespace are
    stripped from the body.

    Raises:
        MalformedFrontMatterError: If either delimiter is missing.

    """
    lines = text.removeprefix("\ufeff").splitlines(keepends=True)
    if not lines or lines[0].rstrip() != DELIMITER:
        msg = f"Missing opening front-matter delimiter '{DELIMITER}'"
        raise MalformedFrontMatterError(msg)

    for index in range(1, len(lines)):
        if lines[index].rstrip() == DELIMITER:
            region = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            return region, body.lstrip("\r\n").rstrip()

    msg = f"Missing closing front-matter delimiter '{DELIMITER}'"
    raise MalformedFrontMatterError(msg)


def parse_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Parse the front-matter of a document into a metadata mapping.

    Recognized keys are coerced to their types: ``status`` becomes a
    :class:`DocumentStatus`, ``publishedOn`` an aware UTC ``datetime`` and
    dotted ``coverImage.*`` keys are folded into a ``coverImage`` mapping.
    Required keys are not enforced here; see :func:`parse_document`.

    Args:
        text: Raw document text.

    Returns:
        Tuple of (metadata dict, body string).

    Raises:
        MalformedFrontMatterError: Missing delimiter, invalid YAML or a
            non-mapping root.
        InvalidStatusError: ``status`` is not ``draft`` or ``published``.
        UnparsableTimestampError: ``publishedOn`` cannot be parsed.

    """
    region, body = split_front_matter(text)
    metadata = _load_mapping(region)
    return _coerce_known_keys(metadata), body


def parse_document(text: str, source_path: Path | None = None) -> Document:
    """Parse raw text into a validated :class:`Document`.

    Raises:
        DocumentError: Any parse or validation failure, tagged with
            ``source_path`` when given.

    """
    try:
        metadata, body = parse_front_matter(text)
        return _build_document(metadata, body, source_path)
    except DocumentError as exc:
        if source_path is not None:
            exc.with_source(source_path)
        raise


def load_document(path: Path, *, encoding: str = "utf-8") -> Document:
    """Read a Markdown file and parse it into a :class:`Document`.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid in ``encoding``.
        DocumentError: If the content is malformed.

    """
    content = path.read_text(encoding=encoding)
    document = parse_document(content, source_path=path)
    logger.debug("Loaded %s (%s)", path, document.status.value)
    return document


def serialize_front_matter(metadata: dict[str, Any]) -> str:
    """Serialize a metadata mapping into a delimited YAML front-matter block."""
    prepared = {str(key): _to_yaml_value(value) for key, value in metadata.items()}
    published_on = prepared.get("publishedOn")
    if isinstance(published_on, datetime):
        prepared["publishedOn"] = format_iso_utc(published_on)
    dumped = yaml.safe_dump(prepared, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"{DELIMITER}\n{dumped}{DELIMITER}\n"


def dump_document(document: Document) -> str:
    """Serialize a document back into Markdown with front-matter."""
    post = frontmatter.Post(document.body)
    post.metadata.update(
        {key: _to_yaml_value(value) for key, value in document.to_front_matter().items()}
    )
    return frontmatter.dumps(post, sort_keys=False) + "\n"


def coerce_status(value: Any) -> DocumentStatus:
    """Coerce a raw front-matter value into a :class:`DocumentStatus`."""
    if isinstance(value, DocumentStatus):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _STATUS_VALUES:
            return DocumentStatus(normalized)
    raise InvalidStatusError(value)


def _load_mapping(region: str) -> dict[str, Any]:
    try:
        data = yaml.load(region, Loader=_FrontMatterLoader)  # noqa: S506
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in front-matter: {exc}"
        raise MalformedFrontMatterError(msg) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Front-matter must be a mapping, got {type(data).__name__}"
        raise MalformedFrontMatterError(msg)
    return {str(key): value for key, value in data.items()}


def _coerce_known_keys(metadata: dict[str, Any]) -> dict[str, Any]:
    cover = _fold_cover_image(metadata)
    if cover is not None:
        metadata["coverImage"] = cover

    if "status" in metadata:
        metadata["status"] = coerce_status(metadata["status"])

    if "publishedOn" in metadata:
        published_on = metadata.pop("publishedOn")
        # An empty key is treated as absent.
        if published_on is not None:
            metadata["publishedOn"] = parse_timestamp(published_on)

    return metadata


def _fold_cover_image(metadata: dict[str, Any]) -> dict[str, Any] | None:
    cover = metadata.pop("coverImage", None)
    dotted = {
        key.removeprefix(_COVER_PREFIX): metadata.pop(key)
        for key in list(metadata)
        if key.startswith(_COVER_PREFIX)
    }

    if isinstance(cover, str):
        cover = {"url": cover}
    if cover is not None and not isinstance(cover, dict):
        msg = f"coverImage must be a mapping with 'url' and 'alt', got {type(cover).__name__}"
        raise MalformedFrontMatterError(msg)
    if dotted:
        cover = {**(cover or {}), **dotted}
    return cover


def _build_document(metadata: dict[str, Any], body: str, source_path: Path | None) -> Document:
    title = metadata.get("title")
    if title is None:
        msg = "Missing required front-matter key 'title'"
        raise MalformedFrontMatterError(msg)
    if not isinstance(title, str) or not title.strip():
        msg = "Front-matter key 'title' must be a non-empty string"
        raise MalformedFrontMatterError(msg)

    description = metadata.get("description")
    if description is None:
        metadata.pop("description", None)
    elif not isinstance(description, str):
        msg = "Front-matter key 'description' must be a string"
        raise MalformedFrontMatterError(msg)

    if not body.strip():
        msg = "Document body is empty"
        raise EmptyBodyError(msg)

    fields = {key: metadata.pop(key) for key in KNOWN_KEYS if key in metadata}
    try:
        return Document(**fields, body=body, source_path=source_path, extra=metadata)
    except ValidationError as exc:
        raise MalformedFrontMatterError(_describe_validation_error(exc)) from exc


def _describe_validation_error(exc: ValidationError) -> str:
    problems = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    ]
    return "Invalid front-matter: " + "; ".join(problems)


def _to_yaml_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, dict):
        return {str(key): _to_yaml_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_yaml_value(item) for item in value]
    return value
