"""Create new draft documents in a content directory."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from folio.core.frontmatter import dump_document
from folio.core.types import Document, DocumentStatus
from folio.core.utils import slugify

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

PLACEHOLDER_BODY = "Start writing here."


def create_draft(
    content_dir: Path,
    title: str,
    *,
    description: str = "",
    tags: list[str] | None = None,
) -> Path:
    """Write a draft skeleton named after ``title``.

    Existing files are never overwritten; a numeric suffix is appended to the
    filename instead (``my-post-2.md``, ``my-post-3.md``...).

    Returns:
        Path of the new file.

    """
    document = Document(
        title=title,
        description=description,
        status=DocumentStatus.DRAFT,
        tags=tags or [],
        body=PLACEHOLDER_BODY,
    )

    content_dir.mkdir(parents=True, exist_ok=True)
    base_name = slugify(title)
    filepath = content_dir / f"{base_name}.md"
    suffix = 2
    while filepath.exists():
        filepath = content_dir / f"{base_name}-{suffix}.md"
        suffix += 1

    filepath.write_text(dump_document(document), encoding="utf-8")
    logger.info("Created draft %s", filepath)
    return filepath
