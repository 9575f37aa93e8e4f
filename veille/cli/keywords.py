"""Keyword catalog commands."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..errors import ConfigError

console = Console()
keywords_app = typer.Typer(help="Inspect the keyword catalog")


@keywords_app.command("list")
def keywords_list(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config.yaml",
    ),
) -> None:
    """List the keywords searched on every run."""
    config = Config(config_path)
    try:
        catalog = config.catalog
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    source = config.keywords_path if config.keywords_path.exists() else "built-in"
    table = Table(title=f"Keywords ({source})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Language", style="magenta")
    table.add_column("Locale", style="green")
    table.add_column("Keyword", style="cyan")

    for i, (keyword, group) in enumerate(catalog.iter_keywords(), start=1):
        table.add_row(str(i), group.tag, group.locale, keyword)

    console.print(table)
    console.print(f"{catalog.total_keywords} searches per run")
