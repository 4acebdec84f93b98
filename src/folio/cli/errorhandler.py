"""CLI error handling utilities."""

from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.console import Console
from rich.markup import escape

from folio.core.exceptions import ConfigError, ContentNotFoundError, DocumentError, FolioError

console = Console(stderr=True)


@contextmanager
def handle_cli_errors(*, debug: bool = False) -> Generator[None, None, None]:
    """Context manager to handle CLI errors gracefully.

    Args:
        debug: If True, re-raise for a full traceback. If False, print a
            one-line error and exit with code 1.

    """
    try:
        yield
    except (KeyboardInterrupt, SystemExit):
        raise
    except ConfigError as e:
        if debug:
            raise
        console.print(f"[bold red]Configuration error:[/bold red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1) from e
    except ContentNotFoundError as e:
        if debug:
            raise
        console.print(f"[bold red]Missing content:[/bold red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1) from e
    except DocumentError as e:
        if debug:
            raise
        console.print(f"[bold red]{type(e).__name__}:[/bold red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1) from e
    except FolioError as e:
        if debug:
            raise
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1) from e
    except OSError as e:
        if debug:
            raise
        console.print(f"[bold red]File error:[/bold red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1) from e
    except Exception as e:
        if debug:
            console.print_exception(show_locals=False)
            raise typer.Exit(1) from e

        console.print(f"[bold red]An unexpected error occurred:[/bold red] {escape(str(e))}", highlight=False)
        console.print("[dim]Run with [bold]--debug[/bold] for more details.[/dim]")
        raise typer.Exit(1) from e
