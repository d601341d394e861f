"""HTTP server for httpr"""

from httpr.server.app import create_app
from httpr.server.runner import start_server

__all__ = [
    "create_app",
    "start_server",
]
