"""
Web Locator - CLI Entry Point.

Inspect how locators are classified and which queries a fuzzy locator
turns into, without a browser.

Usage:
    web-locator classify "#login"
    web-locator explain "Password" --capability field
"""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from web_locator.config import get_settings
from web_locator.exceptions import LocatorClassificationError
from web_locator.locator import classify
from web_locator.strategies import Capability, describe_chain
from web_locator.utils.logging import setup_logging_from_settings

app = typer.Typer(
    name="web-locator",
    help="Inspect locator classification and strategy chains",
    add_completion=False,
)

console = Console()
logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    settings = get_settings()
    setup_logging_from_settings(settings.logging, debug=verbose or settings.debug)


def _parse(locator: str, key: Optional[str]):
    return classify({key: locator} if key else locator)


@app.command("classify")
def classify_command(
    locator: str = typer.Argument(..., help="Locator text"),
    key: Optional[str] = typer.Option(None, "--key", "-k", help="Treat as structured locator {KEY: LOCATOR}"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
):
    """Show how a locator is classified."""
    _configure_logging(verbose)
    try:
        parsed = _parse(locator, key)
    except LocatorClassificationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(show_header=False)
    table.add_row("rendered", str(parsed))
    table.add_row("type", parsed.type.value if parsed.type else "-")
    table.add_row("value", parsed.value)
    table.add_row("fuzzy", str(parsed.is_fuzzy).lower())
    if not parsed.is_fuzzy:
        table.add_row("query", str(parsed.to_query()))
    console.print(table)


@app.command()
def explain(
    locator: str = typer.Argument(..., help="Locator text"),
    capability: Capability = typer.Option(Capability.ELEMENT, "--capability", "-c", help="UI capability"),
    key: Optional[str] = typer.Option(None, "--key", "-k", help="Treat as structured locator {KEY: LOCATOR}"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
):
    """List the queries tried for a locator, in order."""
    _configure_logging(verbose)
    try:
        parsed = _parse(locator, key)
        if parsed.is_fuzzy:
            steps = describe_chain(capability, parsed.value)
        else:
            steps = [(parsed.type.value, parsed.to_query())]
    except LocatorClassificationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title=f"{parsed} as {capability.value}")
    table.add_column("#", justify="right")
    table.add_column("strategy", no_wrap=True)
    table.add_column("by", no_wrap=True)
    table.add_column("query", overflow="fold")
    for i, (name, query) in enumerate(steps, 1):
        table.add_row(str(i), name, query.by, query.value)
    console.print(table)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
