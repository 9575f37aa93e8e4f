"""Serve command implementation."""

from typing import Optional

import typer
import uvicorn
from rich.console import Console

from ..config import Config
from ..errors import ConfigError

console = Console()


def serve_command(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port (default from config)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Start the HTTP API."""
    try:
        server = Config().settings.server
    except ConfigError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)

    uvicorn.run(
        "veille.server.app:app",
        host=host or server.host,
        port=port or server.port,
        reload=reload,
    )
