"""WebSocket table host that lets a renderer play against the house."""

from .server import TableSession, handle_connection, run_server

__all__ = ["TableSession", "handle_connection", "run_server"]
