"""Run command implementation."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import Config
from ..errors import ConfigError
from ..log import configure_logging
from ..pipeline import RunSummary, print_run_summary
from ..runtime import build_runtime

console = Console()


async def _run_once(config: Config, interval: Optional[float]):
    runtime = build_runtime(config)
    if interval is not None:
        runtime.request_interval = interval
    pipeline = runtime.pipeline()
    try:
        summary: RunSummary = await pipeline.run()
    finally:
        await runtime.close()
    return pipeline, summary


def run_command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config.yaml",
    ),
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        "-i",
        help="Seconds between searches (default from config)",
        min=0.0,
    ),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level"),
) -> None:
    """Search every keyword once and store the results."""
    configure_logging(log_level)
    config = Config(config_path)

    try:
        catalog = config.catalog
        console.print(Panel.fit(
            f"🚀 Veille Marine Royale\n"
            f"{catalog.total_keywords} keywords • {', '.join(catalog.tags)}",
            style="bold blue",
        ))
        pipeline, summary = asyncio.run(_run_once(config, interval))
    except ConfigError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Run interrupted by user[/yellow]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Run failed: {e}[/red]")
        raise typer.Exit(1)

    print_run_summary(pipeline, summary)

    if not summary.success:
        console.print(f"[yellow]{summary.message}[/yellow]")
        raise typer.Exit(1)

    console.print(f"[green]✅ {summary.message}[/green]")
