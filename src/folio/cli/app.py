"""Main Typer application for folio."""

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from folio.cli.errorhandler import handle_cli_errors
from folio.core.config import ConfigLoader, FolioConfig
from folio.core.frontmatter import load_document
from folio.core.rendering import MarkdownRenderer
from folio.core.types import BuildReport
from folio.engine.build import SiteBuilder
from folio.engine.drafts import create_draft
from folio.infra.store import DocumentStore
from folio.logging_setup import configure_logging

app = typer.Typer(
    name="folio",
    help="Parse, check and publish Markdown articles with YAML front-matter.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


@dataclass
class CliState:
    site_root: Path
    debug: bool = False

    def load_config(self) -> FolioConfig:
        return ConfigLoader(self.site_root).load()


@app.callback()
def main(
    ctx: typer.Context,
    site_root: Annotated[
        Path,
        typer.Option("--site-root", "-C", help="Site root containing folio.yml", file_okay=False),
    ] = Path(),
    debug: Annotated[bool, typer.Option("--debug", help="Verbose logging and full tracebacks")] = False,
) -> None:
    configure_logging("DEBUG" if debug else None)
    ctx.obj = CliState(site_root=site_root.resolve(), debug=debug)


@app.command()
def check(
    ctx: typer.Context,
    content_dir: Annotated[
        Path | None,
        typer.Argument(help="Directory of Markdown documents (defaults to the configured one)"),
    ] = None,
) -> None:
    """Parse every document and report the malformed ones."""
    state: CliState = ctx.obj
    with handle_cli_errors(debug=state.debug):
        config = state.load_config()
        store = DocumentStore(content_dir) if content_dir is not None else None
        report = SiteBuilder(config, store=store).check()

    _print_report(report, verb="checked")
    if report.issues:
        raise typer.Exit(1)


@app.command()
def show(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Markdown document to inspect", dir_okay=False)],
) -> None:
    """Print a document's parsed front-matter."""
    state: CliState = ctx.obj
    with handle_cli_errors(debug=state.debug):
        document = load_document(path)

    table = Table(title=str(path), show_header=False)
    table.add_column("Key", style="bold cyan")
    table.add_column("Value")
    for key, value in document.to_front_matter().items():
        table.add_row(key, escape(str(value)))
    table.add_row("words", str(document.word_count))
    console.print(table)


@app.command()
def render(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Markdown document to render", dir_okay=False)],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the HTML here instead of printing it"),
    ] = None,
) -> None:
    """Render a document body to HTML."""
    state: CliState = ctx.obj
    with handle_cli_errors(debug=state.debug):
        config = state.load_config()
        document = load_document(path)
        html = MarkdownRenderer.from_settings(config.render).render(document.body)
        if output is not None:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(html + "\n", encoding="utf-8")

    if output is None:
        typer.echo(html)
    else:
        console.print(f"Wrote {output}", highlight=False)


@app.command()
def build(
    ctx: typer.Context,
    drafts: Annotated[bool, typer.Option("--drafts", help="Include draft documents")] = False,
    workers: Annotated[int | None, typer.Option("--workers", "-j", min=1, help="Parallel workers")] = None,
    strict: Annotated[bool, typer.Option("--strict", help="Exit 1 if any document was skipped")] = False,
) -> None:
    """Build the static site into the output directory."""
    state: CliState = ctx.obj
    with handle_cli_errors(debug=state.debug):
        config = state.load_config()
        if drafts:
            config.build.include_drafts = True
        if workers is not None:
            config.build.workers = workers
        report = SiteBuilder(config).build()

    _print_report(report, verb="built")
    if report.issues and (strict or config.build.strict):
        raise typer.Exit(1)


@app.command()
def new(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Title of the new article")],
    description: Annotated[str, typer.Option("--description", "-d", help="Short summary")] = "",
    tags: Annotated[list[str] | None, typer.Option("--tag", "-t", help="Tag (repeatable)")] = None,
) -> None:
    """Create a draft article in the content directory."""
    state: CliState = ctx.obj
    with handle_cli_errors(debug=state.debug):
        config = state.load_config()
        path = create_draft(config.paths.abs_content_dir, title, description=description, tags=tags)

    console.print(f"Created draft [bold]{escape(str(path))}[/bold]", highlight=False)


def _print_report(report: BuildReport, *, verb: str) -> None:
    if report.issues:
        console.print("[bold]Skipped documents[/bold]")
        for issue in report.issues:
            console.print(f"  [bold red]✘[/bold red] {escape(str(issue.source_path or '-'))}", highlight=False)
            console.print(f"    [red]{issue.kind}[/red]: {escape(issue.message)}", highlight=False)

    status = "[bold green]OK[/bold green]" if report.ok else "[bold yellow]ISSUES[/bold yellow]"
    console.print(f"{status} {verb}: {report.summary()}", highlight=False)
    if report.output_dir is not None and report.rendered:
        console.print(f"Output: {report.output_dir}", highlight=False)
