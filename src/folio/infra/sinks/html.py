"""HTML output sink for publishing rendered documents as a static site."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from folio.engine.template_loader import TemplateLoader

if TYPE_CHECKING:
    from folio.core.config import SiteSettings
    from folio.core.types import Document, RenderedDocument

logger = logging.getLogger(__name__)

_UNDATED = datetime.min.replace(tzinfo=UTC)
MANIFEST_NAME = ".folio-pages"


@dataclass(frozen=True)
class IndexEntry:
    document: Document
    href: str
    description: str


class HtmlSiteSink:
    """Publishes rendered documents as HTML pages.

    Creates one ``<slug>.html`` per document plus an ``index.html`` listing
    them newest first. Pages written by an earlier build are listed in
    ``.folio-pages``; only those are removed before a new build, so other
    HTML in the output directory is left alone.
    """

    def __init__(self, output_dir: Path, site: SiteSettings, templates: TemplateLoader | None = None) -> None:
        self.output_dir = Path(output_dir)
        self.site = site
        self.templates = templates or TemplateLoader()

    def publish(self, rendered: list[RenderedDocument]) -> list[Path]:
        """Write every document page and the index.

        Returns:
            Paths written, index last.

        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self._clean_previous_pages()

        ordered = sort_newest_first(rendered)
        written = [self._write_document(item) for item in ordered]
        written.append(self._write_index(ordered))
        self._write_manifest(written)
        logger.info("Wrote %d page(s) to %s", len(written), self.output_dir)
        return written

    @property
    def manifest_path(self) -> Path:
        return self.output_dir / MANIFEST_NAME

    def _clean_previous_pages(self) -> None:
        if not self.manifest_path.is_file():
            return
        for name in self.manifest_path.read_text(encoding="utf-8").splitlines():
            # Bare page names only; anything else was not written here.
            if not name.endswith(".html") or Path(name).name != name:
                continue
            (self.output_dir / name).unlink(missing_ok=True)

    def _write_manifest(self, written: list[Path]) -> None:
        names = "".join(f"{path.name}\n" for path in written)
        self.manifest_path.write_text(names, encoding="utf-8")

    def _write_document(self, item: RenderedDocument) -> Path:
        output_file = self.output_dir / f"{item.slug}.html"
        page = self.templates.render_template(
            "document.html.jinja2",
            site=self.site,
            document=item.document,
            html=item.html,
            headings=item.headings,
            description=item.document.description or item.summary,
        )
        output_file.write_text(page, encoding="utf-8")
        return output_file

    def _write_index(self, ordered: list[RenderedDocument]) -> Path:
        index_file = self.output_dir / "index.html"
        entries = [
            IndexEntry(
                document=item.document,
                href=f"{item.slug}.html",
                description=item.document.description or item.summary,
            )
            for item in ordered
        ]
        page = self.templates.render_template("index.html.jinja2", site=self.site, entries=entries)
        index_file.write_text(page, encoding="utf-8")
        return index_file


def sort_newest_first(rendered: list[RenderedDocument]) -> list[RenderedDocument]:
    """Order by publish date, newest first; undated documents go last, by title."""
    by_title = sorted(rendered, key=lambda item: item.document.title.lower())
    return sorted(by_title, key=lambda item: item.document.published_on or _UNDATED, reverse=True)
