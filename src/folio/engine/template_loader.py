"""Jinja2 template loader for site pages."""

from importlib.resources import files
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from folio.core.utils import slugify, truncate_words
from folio.engine import filters


class TemplateLoader:
    """Loads and renders the Jinja2 templates used for HTML output.

    Supports:
    - Template inheritance (``base.html.jinja2``)
    - Custom filters (datetime formatting, slugify, truncate)
    - A site-specific template directory overriding the bundled one
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        """Initialize TemplateLoader.

        Args:
            template_dir: Path to template directory. Defaults to the templates
                bundled with ``folio.engine``.

        """
        if template_dir is None:
            template_dir = Path(str(files("folio.engine").joinpath("templates")))

        self.template_dir = template_dir

        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(["html", "jinja2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

        self._register_filters()

    def _register_filters(self) -> None:
        self.env.filters["format_datetime"] = filters.format_datetime
        self.env.filters["isoformat"] = filters.isoformat
        self.env.filters["truncate_words"] = truncate_words
        self.env.filters["slugify"] = slugify

    def load_template(self, template_name: str) -> Template:
        """Load a template by name.

        Raises:
            TemplateNotFound: If template does not exist

        """
        return self.env.get_template(template_name)

    def render_template(self, template_name: str, **context: Any) -> str:
        template = self.load_template(template_name)
        return template.render(**context)
