"""Markdown rendering for document bodies."""

from __future__ import annotations

import html
import logging
from typing import TYPE_CHECKING

from markdown_it import MarkdownIt

from folio.core.types import Heading
from folio.core.utils import slugify, truncate_words

if TYPE_CHECKING:
    from collections.abc import Sequence

    from markdown_it.token import Token

    from folio.core.config import RenderSettings

logger = logging.getLogger(__name__)

_TEXT_TOKENS = frozenset({"text", "code_inline"})
_BREAK_TOKENS = frozenset({"softbreak", "hardbreak"})


class MarkdownRenderer:
    """Renders CommonMark bodies to HTML.

    Raw HTML blocks pass through untouched, which keeps rendering idempotent:
    feeding rendered output back in yields the same output.
    """

    def __init__(
        self,
        *,
        allow_html: bool = True,
        tables: bool = True,
        typographer: bool = False,
        heading_anchors: bool = True,
    ) -> None:
        self.heading_anchors = heading_anchors
        self._md = MarkdownIt("commonmark", {"html": allow_html, "typographer": typographer})
        if tables:
            self._md.enable(["table", "strikethrough"])
        if typographer:
            self._md.enable(["replacements", "smartquotes"])
        for rule in ("fence", "code_block"):
            self._md.add_render_rule(rule, _filling_blank_lines(self._md.renderer.rules[rule]))

    @classmethod
    def from_settings(cls, settings: RenderSettings) -> MarkdownRenderer:
        return cls(
            allow_html=settings.allow_html,
            tables=settings.tables,
            typographer=settings.typographer,
            heading_anchors=settings.heading_anchors,
        )

    def render(self, text: str) -> str:
        """Render Markdown ``text`` to HTML.

        Malformed markup comes out as literal text. If the parser itself gives
        up, the body is emitted as escaped preformatted text instead.
        """
        if not text:
            return ""
        env: dict = {}
        try:
            tokens = self._md.parse(text, env)
            if self.heading_anchors:
                _assign_anchors(tokens)
            return self._render_blocks(tokens, env)
        except (RecursionError, ValueError) as exc:
            logger.warning("Markdown rendering failed, emitting literal text: %s", exc)
            return f"<pre>{html.escape(text)}</pre>"

    def _render_blocks(self, tokens: Sequence[Token], env: dict) -> str:
        """Render top-level blocks separated by blank lines.

        Each block then starts its own HTML block on re-render, so a blank
        line inside a code block cannot end the block around it.
        """
        blocks: list[str] = []
        start = 0
        for index, token in enumerate(tokens):
            if token.level == 0 and token.nesting <= 0:
                rendered = self._md.renderer.render(tokens[start : index + 1], self._md.options, env)
                blocks.append(rendered.strip("\n"))
                start = index + 1
        return "\n\n".join(block for block in blocks if block)

    def extract_headings(self, text: str) -> list[Heading]:
        """Return the document outline in order of appearance."""
        tokens = self._md.parse(text or "")
        return [heading for _, heading in _iter_headings(tokens)]

    def plain_text(self, text: str) -> str:
        """Return the visible text of ``text`` with markup removed."""
        tokens = self._md.parse(text or "")
        blocks = [_inline_text(token.children or []) for token in tokens if token.type == "inline"]
        return " ".join(block for block in blocks if block)

    def summarize(self, text: str, max_words: int = 40) -> str:
        return truncate_words(self.plain_text(text), max_words)


def _iter_headings(tokens: Sequence[Token]):
    seen: dict[str, int] = {}
    for index, token in enumerate(tokens):
        if token.type != "heading_open":
            continue
        inline = tokens[index + 1]
        text = _inline_text(inline.children or [])
        anchor = slugify(text)
        count = seen.get(anchor, 0)
        seen[anchor] = count + 1
        if count:
            anchor = f"{anchor}-{count}"
        yield token, Heading(level=int(token.tag[1:]), text=text, anchor=anchor)


def _filling_blank_lines(rule):
    def render_rule(renderer, tokens, idx, options, env):
        return _fill_blank_lines(rule(tokens, idx, options, env))

    return render_rule


def _fill_blank_lines(code: str) -> str:
    """Fold blank lines of rendered code into the line before as ``&#10;``.

    The displayed text is unchanged, but the HTML has no blank line that
    would end an enclosing ``<ul>`` or ``<blockquote>`` block when the
    output is parsed again.
    """
    lines = code.split("\n")
    if len(lines) < 3:
        return code
    filled = [lines[0]]
    for line in lines[1:-1]:
        if line.strip():
            filled.append(line)
        else:
            filled[-1] += "&#10;" + line
    filled.append(lines[-1])
    return "\n".join(filled)


def _assign_anchors(tokens: Sequence[Token]) -> None:
    for token, heading in _iter_headings(tokens):
        if token.attrGet("id") is None:
            token.attrSet("id", heading.anchor)


def _inline_text(children: Sequence[Token]) -> str:
    parts: list[str] = []
    for child in children:
        if child.type in _TEXT_TOKENS:
            parts.append(child.content)
        elif child.type in _BREAK_TOKENS:
            parts.append(" ")
        elif child.type == "image":
            parts.append(child.content)
    return "".join(parts).strip()


# --- Default renderer ---
_default_renderer = MarkdownRenderer()


def render_html(content: str | None) -> str | None:
    """Render markdown content to HTML with default settings.

    Returns None if content is None or empty.
    """
    if content:
        return _default_renderer.render(content)
    return None


def extract_headings(content: str) -> list[Heading]:
    return _default_renderer.extract_headings(content)
