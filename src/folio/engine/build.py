"""Site build pipeline: load, filter, render and publish documents."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from folio.core.exceptions import DuplicateSlugError
from folio.core.rendering import MarkdownRenderer
from folio.core.types import BuildIssue, BuildReport, Document, RenderedDocument
from folio.infra.sinks.html import HtmlSiteSink
from folio.infra.store import DocumentStore

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from folio.core.config import FolioConfig

logger = logging.getLogger(__name__)

SUMMARY_WORDS = 40


class SiteBuilder:
    """Builds a static site from a content directory.

    Every document is parsed and rendered independently. A malformed
    document becomes a :class:`BuildIssue` in the report and the rest of the
    batch carries on.
    """

    def __init__(
        self,
        config: FolioConfig,
        *,
        store: DocumentStore | None = None,
        renderer: MarkdownRenderer | None = None,
        sink: HtmlSiteSink | None = None,
    ) -> None:
        self.config = config
        self.store = store or DocumentStore(config.paths.abs_content_dir)
        self.renderer = renderer or MarkdownRenderer.from_settings(config.render)
        self.sink = sink or HtmlSiteSink(config.paths.abs_output_dir, config.site)

    @property
    def include_drafts(self) -> bool:
        return self.config.build.include_drafts

    def check(self) -> BuildReport:
        """Parse every document without rendering or writing anything."""
        report = BuildReport()
        loaded = self._map(self.store.try_load, self.store.paths())
        report.rendered = [document.resolved_slug for document in self._accepted(loaded, report)]
        logger.info("Checked %s: %s", self.store.root, report.summary())
        return report

    def build(self) -> BuildReport:
        """Render every accepted document and publish the site."""
        report = BuildReport(output_dir=self.sink.output_dir)
        processed = self._map(self._process, self.store.paths())
        accepted = self._accepted(processed, report)
        self.sink.publish(accepted)
        report.rendered = [item.slug for item in accepted]
        logger.info("Built %s: %s", self.sink.output_dir, report.summary())
        return report

    def render_document(self, document: Document) -> RenderedDocument:
        return RenderedDocument(
            document=document,
            html=self.renderer.render(document.body),
            headings=self.renderer.extract_headings(document.body),
            summary=self.renderer.summarize(document.body, SUMMARY_WORDS),
        )

    def _process(self, path: Path) -> RenderedDocument | Document | BuildIssue:
        loaded = self.store.try_load(path)
        if isinstance(loaded, BuildIssue):
            return loaded
        if not loaded.is_published and not self.include_drafts:
            return loaded
        return self.render_document(loaded)

    def _map(self, func, paths: list[Path]) -> list:
        """Apply ``func`` to every path, in order, optionally on a thread pool."""
        workers = self.config.build.workers
        if workers <= 1 or len(paths) <= 1:
            return [func(path) for path in paths]
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(func, paths))

    def _accepted(self, loaded: Iterable, report: BuildReport) -> list:
        """Filter loaded or rendered documents, recording issues and skipped drafts."""
        accepted = []
        seen: dict[str, Path | None] = {}
        for item in loaded:
            if isinstance(item, BuildIssue):
                report.issues.append(item)
                continue
            document = item.document if isinstance(item, RenderedDocument) else item
            slug = document.resolved_slug
            if not document.is_published and not self.include_drafts:
                report.skipped_drafts.append(slug)
                continue
            if slug in seen:
                error = DuplicateSlugError(slug, seen[slug], document.source_path)
                logger.warning("Skipping %s", error)
                report.issues.append(BuildIssue.from_exception(error))
                continue
            seen[slug] = document.source_path
            accepted.append(item)
        return accepted


def build_site(config: FolioConfig) -> BuildReport:
    return SiteBuilder(config).build()


def check_site(config: FolioConfig) -> BuildReport:
    return SiteBuilder(config).check()
