"""
Serve command: start the HTTP API.
"""
from .base import BaseCommand


class ServeCommand(BaseCommand):
    """Run the FastAPI service with uvicorn."""

    @classmethod
    def help(cls) -> str:
        return "Start the HTTP API server"

    @classmethod
    def add_arguments(cls, parser):
        parser.add_argument("--host", help="Bind address (default from configuration)")
        parser.add_argument("--port", type=int, help="Port (default from configuration)")

    async def execute(self) -> int:
        from ..api_server import serve

        host = self.args.host or self.config.server.host
        port = self.args.port or self.config.server.port
        print(f"🚀 Serving widgetlens API on http://{host}:{port}")
        await serve(host=host, port=port)
        return 0
