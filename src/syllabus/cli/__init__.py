"""CLI commands for Syllabus.

Provides command-line interface using Typer:
- syllabus serve: Run the API server
- syllabus cache invalidate: Drop the published courses snapshot
- syllabus cache views: Show a course view counter

Usage:
    syllabus --help
    syllabus serve --port 8080
    syllabus cache views 42
"""

import typer

from syllabus.cli.cache_cmd import app as cache_app
from syllabus.cli.serve import app as serve_app

app = typer.Typer(
    name="syllabus",
    help="Syllabus: course catalog service",
    no_args_is_help=True,
)

app.add_typer(serve_app, name="serve")
app.add_typer(cache_app, name="cache")


@app.callback()
def callback() -> None:
    """Syllabus: course catalog service."""
    pass


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
