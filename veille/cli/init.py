"""Init command implementation."""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import DEFAULT_CATALOG, Config, ServerConfig, save_catalog, save_config
from ..config.loader import DEFAULT_CONFIG_DIR
from ..db import create_supabase_client, ensure_schema, init_database, validate_connection
from ..errors import ConfigError, SchemaError

console = Console()


def init_command(
    config_dir: Path = typer.Option(
        DEFAULT_CONFIG_DIR,
        "--config-dir",
        "-c",
        help="Configuration directory",
    ),
    interval: float = typer.Option(1.0, "--interval", help="Seconds between searches", min=0.0),
    country: str = typer.Option("ma", "--country", help="Country bias for searches"),
    seed_keywords: bool = typer.Option(
        True,
        "--seed-keywords/--no-seed-keywords",
        help="Write the default keyword catalog to keywords.yaml",
    ),
) -> None:
    """Initialize Veille configuration and the articles table."""
    console.print(Panel.fit("🚀 Veille Marine Royale - Initialization", style="bold blue"))

    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.yaml"
    keywords_path = config_dir / "keywords.yaml"

    # Secrets stay in the environment; only tunables go to the file.
    save_config(
        {
            "table": "articles",
            "country": country,
            "results_per_keyword": 100,
            "request_interval": interval,
            "request_timeout": 30.0,
            "server": ServerConfig().model_dump(),
        },
        config_path,
    )
    console.print(f"✅ Created config: {config_path}")

    if seed_keywords:
        save_catalog(DEFAULT_CATALOG, keywords_path)
        console.print(
            f"✅ Created keywords: {keywords_path} "
            f"(seeded with {DEFAULT_CATALOG.total_keywords} keywords)"
        )

    try:
        settings = Config(config_path).settings
    except ConfigError as e:
        console.print(
            f"[red]❌ {e}[/red]\n"
            "Set them in the environment or a .env file:\n"
            "[bold]SUPABASE_URL, SUPABASE_KEY, SERPAPI_KEY[/bold]"
        )
        raise typer.Exit(1)

    console.print("\n[bold]Initializing articles table...[/bold]")
    try:
        if settings.database_url:
            init_database(settings.database_url, settings.table)
        else:
            client = create_supabase_client(settings)
            if not validate_connection(client, settings.table):
                console.print("[red]❌ Data store connection failed![/red]")
                raise typer.Exit(1)
            ensure_schema(client, settings.table)
    except SchemaError as e:
        console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"✅ Table {settings.table} ready")

    console.print(
        Panel(
            f"[green]✅ Veille initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Keywords: {keywords_path if seed_keywords else 'built-in'}\n\n"
            f"Next steps:\n"
            f"1. Run once: [bold]veille run[/bold]\n"
            f"2. Or serve the API: [bold]veille serve[/bold]",
            style="green",
        )
    )
