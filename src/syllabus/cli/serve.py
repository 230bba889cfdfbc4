"""``syllabus serve``: run the API under uvicorn.

Usage:
    syllabus serve
    syllabus serve --port 9000 --reload
"""

from __future__ import annotations

import typer
from rich.console import Console

from syllabus.config import settings

app = typer.Typer(help="Run the Syllabus API server")
console = Console()


@app.callback(invoke_without_command=True)
def serve(
    host: str = typer.Option(settings.host, "--host", "-h", help="Interface to bind"),
    port: int = typer.Option(settings.port, "--port", "-p", help="Port to listen on"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Restart on code changes"),
    workers: int = typer.Option(1, "--workers", "-w", min=1, help="Worker processes"),
    log_level: str = typer.Option(
        settings.log_level.lower(), "--log-level", "-l", help="uvicorn log level"
    ),
) -> None:
    """Start the HTTP server."""
    import uvicorn

    if reload and workers > 1:
        console.print("[yellow]--reload runs a single worker; ignoring --workers[/yellow]")
        workers = 1

    console.print(f"Syllabus ({settings.env}) listening on [bold]{host}:{port}[/bold]")
    uvicorn.run(
        "syllabus.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level.lower(),
    )
