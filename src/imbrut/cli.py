"""imbrut CLI - paced HTTP credential auditing."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from imbrut.application import Application
from imbrut.config import is_verbose, load_settings, resolve_config_path
from imbrut.errors import ImbrutError
from imbrut.modules.progress import RichProgressReporter
from imbrut.utils.logsetup import setup_logging

app = typer.Typer(
    name="imbrut",
    help="Paced credential auditing for HTTP login endpoints you are authorized to test",
    no_args_is_help=True,
)
console = Console()

EXIT_MATCH = 0
EXIT_ERROR = 1
EXIT_NO_MATCH = 2


def get_version() -> str:
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        return pkg_version("imbrut")
    except PackageNotFoundError:
        return "0.0.0+unknown"


@app.command()
def version() -> None:
    """Show the installed imbrut version."""
    console.print(f"imbrut {get_version()}")


def _load(config: Optional[Path], verbose: bool) -> Application:
    setup_logging(verbose or is_verbose(), console=console)
    config_path = resolve_config_path(config)
    try:
        settings = load_settings(config_path)
    except ImbrutError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(EXIT_ERROR)
    return Application(settings, reporter=RichProgressReporter(console))


@app.command()
def count(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to the YAML config"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Print how many credentials a run would try."""
    application = _load(config, verbose)
    try:
        workload = application.workload()
    except ImbrutError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(EXIT_ERROR)
    console.print(f"{workload} credentials")


@app.command()
def run(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to the YAML config"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Check credentials against the configured target until one is accepted."""
    application = _load(config, verbose)
    settings = application.settings

    console.print(
        Panel(
            f"[bold]Target:[/bold] {settings.target.method} {settings.target.uri}\n"
            f"[bold]Auth:[/bold] {settings.target.auth_type}\n"
            f"[bold]Dictionary:[/bold] {settings.dict_type}\n"
            f"[bold]Plan:[/bold] {', '.join(map(str, settings.strategy)) or 'drain all'}",
            title=f"imbrut {get_version()}",
            border_style="green",
        )
    )

    try:
        result = application.run()
    except ImbrutError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(EXIT_ERROR)

    if result.errors:
        console.print(f"[yellow]{len(result.errors)} checks failed with transport errors.[/yellow]")
    if result.matched:
        console.print(f"[green]Accepted after {result.checked} checks:[/green] {result.credential}")
        raise typer.Exit(EXIT_MATCH)
    console.print(f"[yellow]Exhausted after {result.checked} checks, no match.[/yellow]")
    raise typer.Exit(EXIT_NO_MATCH)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
