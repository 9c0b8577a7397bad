"""Main Typer application for Folio."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from folio import __version__
from folio.cli.errorhandler import handle_cli_errors
from folio.config.settings import FolioConfig
from folio.content.indexer import run_indexer
from folio.content.repository import ProjectRepository
from folio.logging_setup import configure_logging, console
from folio.render.markdown import ContentRenderer

app = typer.Typer(
    name="folio",
    help="Portfolio site: content indexer, delivery API and renderer",
    add_completion=False,
)

show_app = typer.Typer(
    name="show",
    help="Display information about the site",
)
app.add_typer(show_app)

logger = logging.getLogger(__name__)

SiteRootOption = Annotated[
    Path | None,
    typer.Option("--site-root", "-C", help="Site root directory (defaults to the working directory)"),
]
DebugOption = Annotated[bool, typer.Option("--debug", help="Show full tracebacks")]


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"folio {__version__}")
        raise typer.Exit


@app.callback()
def main(
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Logging level (overrides FOLIO_LOG_LEVEL)"),
    ] = None,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit"),
    ] = False,
) -> None:
    """Initialize logging for every command."""
    configure_logging(log_level)


@app.command()
def index() -> None:
    """Scan the content directory and write the JSON index.

    Takes no options: paths come from ``.folio.toml`` in the working directory
    and ``FOLIO_PATHS__*`` environment variables.

    A missing content directory is not an error: nothing is written and the
    command exits successfully. Malformed front matter aborts the run and
    leaves any previous index in place.
    """
    with handle_cli_errors():
        config = FolioConfig.load()
        result = run_indexer(config)

    if result.written:
        console.print(
            f"[green]Indexed {result.post_count} project(s)[/green] into [cyan]{result.output_path}[/cyan]"
        )
    else:
        console.print(f"[yellow]No content directory at {result.source_dir}; nothing written.[/yellow]")


@app.command()
def serve(
    site_root: SiteRootOption = None,
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", help="Bind port")] = None,
    reload: Annotated[bool | None, typer.Option("--reload/--no-reload", help="Reload on code changes")] = None,
    debug: DebugOption = False,
) -> None:
    """Serve the site and the delivery API with uvicorn."""
    import uvicorn

    from folio.web.app import create_app

    with handle_cli_errors(debug=debug):
        config = FolioConfig.load(site_root)
        server = config.server
        bind_host = host or server.host
        bind_port = port or server.port
        use_reload = server.reload if reload is None else reload

        logger.info("Serving %s on http://%s:%d", config.paths.site_root, bind_host, bind_port)
        if use_reload:
            # The reloader imports the factory by name, so it reads the
            # configuration from the working directory itself.
            uvicorn.run(
                "folio.web.app:create_app",
                factory=True,
                host=bind_host,
                port=bind_port,
                reload=True,
                log_config=None,
            )
        else:
            uvicorn.run(create_app(config), host=bind_host, port=bind_port, log_config=None)


@app.command()
def render(
    slug: Annotated[str, typer.Argument(help="Project slug (file name without extension)")],
    site_root: SiteRootOption = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the HTML here instead of stdout"),
    ] = None,
    wide_images: Annotated[bool, typer.Option("--wide-images", help="Render every figure full-bleed")] = False,
    debug: DebugOption = False,
) -> None:
    """Render one project's Markdown body to HTML."""
    with handle_cli_errors(debug=debug):
        config = FolioConfig.load(site_root)
        document = ProjectRepository.from_config(config).get(slug)
        if document is None:
            console.print(f"[bold red]Unknown project:[/bold red] {slug}")
            raise typer.Exit(1)
        html = ContentRenderer(config.render).render(document.content, wide_images=wide_images)

    if output is None:
        typer.echo(html, nl=False)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(html, encoding="utf-8")
        console.print(f"[green]Wrote[/green] [cyan]{output}[/cyan]")


@show_app.command(name="config")
def show_config(site_root: SiteRootOption = None, debug: DebugOption = False) -> None:
    """Show the effective configuration after file and environment overrides."""
    with handle_cli_errors(debug=debug):
        config = FolioConfig.load(site_root)

    table = Table(title="Folio configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for section, values in config.model_dump(mode="json").items():
        for key, value in values.items():
            table.add_row(f"{section}.{key}", str(value))

    console.print(table)
