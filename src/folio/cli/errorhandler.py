"""CLI error handling utilities."""

from collections.abc import Generator
from contextlib import contextmanager

import typer

from folio.exceptions import (
    ConfigError,
    ConfigValidationError,
    ContentError,
    DuplicateSlugError,
    MalformedFrontmatterError,
    RenderError,
)
from folio.logging_setup import console


@contextmanager
def handle_cli_errors(*, debug: bool = False) -> Generator[None, None, None]:
    """Context manager to handle CLI errors gracefully.

    Args:
        debug: If True, re-raise so the full traceback is shown.

    """
    try:
        yield
    except (KeyboardInterrupt, SystemExit, typer.Exit):
        raise
    except MalformedFrontmatterError as e:
        if debug:
            raise
        console.print(f"[bold red]Malformed Front Matter:[/bold red] {e.path}")
        console.print(f"  {e.reason}", markup=False)
        console.print("Nothing was written; fix the file and run the indexer again.")
        raise typer.Exit(1) from e
    except DuplicateSlugError as e:
        if debug:
            raise
        console.print(f"[bold red]Duplicate Slug:[/bold red] {e.slug}")
        for path in e.paths:
            console.print(f"  - {path}", markup=False)
        raise typer.Exit(1) from e
    except ContentError as e:
        if debug:
            raise
        console.print(f"[bold red]Content Error:[/bold red] {e}", markup=False)
        raise typer.Exit(1) from e
    except ConfigValidationError as e:
        if debug:
            raise
        console.print(f"[bold red]Invalid Configuration:[/bold red] {e.source}")
        for err in e.errors:
            location = ".".join(str(part) for part in err.get("loc", ()))
            message = err.get("msg", "")
            console.print(f"  - {location}: {message}" if location else f"  - {message}", markup=False)
        raise typer.Exit(1) from e
    except ConfigError as e:
        if debug:
            raise
        console.print(f"[bold red]Configuration Error:[/bold red] {e}", markup=False)
        raise typer.Exit(1) from e
    except RenderError as e:
        if debug:
            raise
        console.print(f"[bold red]Render Error:[/bold red] {e}", markup=False)
        raise typer.Exit(1) from e
    except Exception as e:
        if debug:
            console.print_exception(show_locals=False)
            raise typer.Exit(1) from e

        console.print(f"[bold red]An unexpected error occurred:[/bold red] {e}", markup=False)
        console.print("[dim]Run with [bold]--debug[/bold] for more details.[/dim]")
        raise typer.Exit(1) from e
