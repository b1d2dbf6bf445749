import typer
from rich.console import Console

serve_app = typer.Typer(help="Start servers.", no_args_is_help=True)
console = Console(stderr=True)


@serve_app.command("api")
def api(
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:
    """Start the FastAPI REST API server."""
    import uvicorn

    from matchingref.api.app import create_app

    app = create_app()
    console.print(f"[green]Starting API server on {host}:{port}[/green]")
    uvicorn.run(app, host=host, port=port)


@serve_app.command("mcp")
def mcp(
    transport: str = "stdio",
) -> None:
    """Start the MCP server."""
    from matchingref.config import get_settings
    from matchingref.mcp.server import create_mcp_server

    server = create_mcp_server(get_settings())
    console.print(f"[green]Starting MCP server (transport: {transport})[/green]")
    server.run(transport=transport)  # type: ignore[arg-type]
