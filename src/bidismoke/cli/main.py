"""Main CLI application entry point."""

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console

from bidismoke import __version__
from bidismoke.cli.output import OutputFormatter
from bidismoke.core.browser import ChromeBidiSession, find_bundled_chromium
from bidismoke.core.engine import SmokeScenario
from bidismoke.utils.config import ConfigLoader, validate_path
from bidismoke.utils.exceptions import ConfigurationError, SmokeTestError

console = Console()

app = typer.Typer(
    name="bidismoke",
    help="WebDriver BiDi element-screenshot smoke test for Chrome.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"bidismoke v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """bidismoke - WebDriver BiDi element-screenshot smoke test for Chrome."""
    pass


@app.command()
def run(
    chrome_path: Path | None = typer.Option(
        None,
        "--chrome-path",
        help="Chrome binary (default: BIDISMOKE_CHROME_PATH or Selenium Manager)",
    ),
    chromedriver_path: Path | None = typer.Option(
        None,
        "--chromedriver-path",
        help="ChromeDriver binary (default: BIDISMOKE_CHROMEDRIVER_PATH "
        "or Selenium Manager)",
    ),
    bidi_mapper_path: Path | None = typer.Option(
        None,
        "--bidi-mapper-path",
        help="BiDi mapper bundle passed to ChromeDriver",
    ),
    use_chromium: bool = typer.Option(
        False,
        "--use-chromium",
        help="Use Playwright's bundled Chromium as the browser binary",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Show debug logging and result details",
    ),
) -> None:
    """Screenshot a page header over BiDi and check it is a PNG."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ConfigLoader.load()
        if chrome_path:
            config.chrome_path = validate_path(chrome_path, "--chrome-path")
        elif use_chromium:
            config.chrome_path = find_bundled_chromium()
            if config.chrome_path is None:
                raise ConfigurationError(
                    "Playwright Chromium not found. "
                    "Run 'playwright install chromium' first."
                )
        if chromedriver_path:
            config.chromedriver_path = validate_path(
                chromedriver_path, "--chromedriver-path"
            )
        if bidi_mapper_path:
            config.bidi_mapper_path = validate_path(
                bidi_mapper_path, "--bidi-mapper-path"
            )
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(code=4)

    if verbose and config.chrome_path:
        console.print(f"[dim]Using browser at {config.chrome_path}[/dim]")

    formatter = OutputFormatter(verbose=verbose)
    scenario = SmokeScenario(ChromeBidiSession(config), config)
    try:
        result = asyncio.run(scenario.run())
    except SmokeTestError as e:
        formatter.show_failure(e)
        raise typer.Exit(code=1)
    except Exception as e:
        if verbose:
            console.print_exception()
        formatter.show_failure(e)
        raise typer.Exit(code=1)

    formatter.show_success(result)


if __name__ == "__main__":
    app()
