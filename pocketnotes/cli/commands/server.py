"""
Server Commands.

Run the HTTP API that mobile and web clients talk to.
"""

import subprocess
import sys

import typer
from rich.console import Console

from pocketnotes.backend.core.config import find_project_root

app = typer.Typer(help="Server management commands")
console = Console()


def _server_defaults() -> tuple[str, int]:
    """Host and port from application.yaml."""
    try:
        from pocketnotes.backend.core.config import get_app_config
        server = get_app_config().application.server
    except Exception as e:
        console.print("[red]Error: Could not load configuration.[/red]")
        console.print(f"[dim]Error: {e}[/dim]")
        raise typer.Exit(1)
    return server.host, server.port


@app.command()
def start(
    host: str = typer.Option(None, "--host", "-h", help="Server host"),
    port: int = typer.Option(None, "--port", "-p", help="Server port"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
) -> None:
    """
    Start the FastAPI server.

    Examples:
        cli.py server start
        cli.py server start --reload
        cli.py server start --host 0.0.0.0 --port 8080
    """
    default_host, default_port = _server_defaults()
    server_host = host or default_host
    server_port = port or default_port

    cmd = [
        sys.executable, "-m", "uvicorn",
        "pocketnotes.backend.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]

    if reload:
        cmd.append("--reload")

    console.print(f"[bold]Starting server at http://{server_host}:{server_port}[/bold]")
    if reload:
        console.print("[dim]Auto-reload enabled[/dim]")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    try:
        subprocess.run(cmd, check=True, cwd=find_project_root())
    except KeyboardInterrupt:
        console.print("\n[dim]Server stopped[/dim]")
    except subprocess.CalledProcessError as e:
        console.print(f"[red]Server failed to start (exit code: {e.returncode})[/red]")
        raise typer.Exit(e.returncode)
