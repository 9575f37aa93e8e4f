"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .articles import articles_command
from .init import init_command
from .keywords import keywords_app
from .run import run_command
from .serve import serve_command

app = typer.Typer(
    name="veille",
    help="Veille Marine Royale - news watch for the Royal Moroccan Navy",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("run")(run_command)
app.command("serve")(serve_command)
app.command("articles")(articles_command)
app.add_typer(keywords_app, name="keywords", help="Inspect the keyword catalog")


if __name__ == "__main__":
    app()
