"""File-system document store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from folio.core.exceptions import ContentNotFoundError, DocumentError
from folio.core.frontmatter import load_document
from folio.core.types import BuildIssue, Document

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    documents: list[Document] = field(default_factory=list)
    issues: list[BuildIssue] = field(default_factory=list)


class DocumentStore:
    """A directory of Markdown documents, each loaded independently.

    Hidden files and directories (names starting with ``.``) are ignored.
    """

    def __init__(self, root: Path, *, pattern: str = "**/*.md", encoding: str = "utf-8") -> None:
        self.root = Path(root)
        self.pattern = pattern
        self.encoding = encoding

    def paths(self) -> list[Path]:
        """Return document paths in a stable, sorted order.

        Raises:
            ContentNotFoundError: If the root directory does not exist.

        """
        if not self.root.is_dir():
            raise ContentNotFoundError(self.root)
        return sorted(
            path
            for path in self.root.glob(self.pattern)
            if path.is_file() and not _is_hidden(path.relative_to(self.root))
        )

    def load(self, path: Path) -> Document:
        return load_document(path, encoding=self.encoding)

    def try_load(self, path: Path) -> Document | BuildIssue:
        """Load one document, turning failures into a :class:`BuildIssue`."""
        try:
            return self.load(path)
        except DocumentError as exc:
            logger.warning("Skipping %s", exc)
            return BuildIssue.from_exception(exc, path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping unreadable file %s: %s", path, exc)
            return BuildIssue.from_exception(exc, path)

    def load_all(self) -> LoadResult:
        """Load every document; malformed ones are reported, not raised."""
        result = LoadResult()
        for path in self.paths():
            loaded = self.try_load(path)
            if isinstance(loaded, BuildIssue):
                result.issues.append(loaded)
            else:
                result.documents.append(loaded)
        logger.info(
            "Loaded %d document(s) from %s, %d issue(s)",
            len(result.documents),
            self.root,
            len(result.issues),
        )
        return result


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(".") for part in relative.parts)
