"""Server command."""

import cyclopts
import uvicorn

from ohmage.cli.console import get_console

app = cyclopts.App(name="server", help="Run the ohmage API server")


@app.default
def server(
    host: str = "127.0.0.1",
    port: int = 8000,
    reload: bool = False,
) -> None:
    """Run the API server in the foreground.

    Args:
        host: Host to bind to.
        port: Port to listen on.
        reload: Restart on code changes (development only).
    """
    get_console().info(f"Serving on http://{host}:{port}")
    uvicorn.run(
        "ohmage.application.api.rest.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )
