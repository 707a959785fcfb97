"""Web server command."""

import click

from .base import ensure_initialized, get_settings


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Start the JSON API server.

    Examples:

        # Start on default port (8000)
        gymbook serve

        # Development mode with auto-reload
        gymbook serve --reload
    """
    ensure_initialized(ctx)

    import uvicorn

    from ..web import create_app

    click.echo()
    click.echo(click.style("Starting gymbook API server...", fg="green"))
    click.echo(f"  Local:   http://{host}:{port}")
    click.echo()

    uvicorn.run(
        create_app(get_settings(ctx)) if not reload else "gymbook.web:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=reload,
    )
