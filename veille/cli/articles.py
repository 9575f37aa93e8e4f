"""Articles command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..db import ArticleStore, create_supabase_client
from ..errors import VeilleError

console = Console()

DESCRIPTION_MAX = 80


def _short(text: Optional[str], limit: int = DESCRIPTION_MAX) -> str:
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[: limit - 1].rstrip() + "…"


def articles_command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config.yaml",
    ),
    limit: int = typer.Option(50, "--limit", "-n", help="Rows to show", min=1),
) -> None:
    """List stored articles, newest first."""
    try:
        settings = Config(config_path).settings
        store = ArticleStore(create_supabase_client(settings), settings.table)
        rows = store.list_recent(limit)
    except VeilleError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if not rows:
        console.print("[yellow]No articles stored yet. Run 'veille run' first.[/yellow]")
        return

    table = Table(title="Articles")
    table.add_column("Title", style="cyan")
    table.add_column("Description", style="dim")
    table.add_column("Published", style="yellow")
    table.add_column("URL", style="blue")

    for row in rows:
        table.add_row(
            row.get("title") or "",
            _short(row.get("description")),
            (row.get("published_at") or "")[:16].replace("T", " "),
            row.get("url") or "",
        )

    console.print(table)
