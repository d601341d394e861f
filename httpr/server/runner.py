"""Server bootstrap for httpr"""

import logging

import uvicorn

from httpr.core.context import Context
from httpr.server.app import create_app


logger = logging.getLogger(__name__)


def start_server(context: Context) -> None:
    """
    Serve until SIGINT/SIGTERM.

    uvicorn installs the signal handlers and drains in-flight requests;
    the context's request log is closed once it returns.
    """
    config = context.config
    app = create_app(context)

    try:
        uvicorn.run(
            app,
            host=config.host,
            port=config.port,
            log_level=config.logging.level.lower(),
            access_log=False,
        )
    finally:
        logger.info("Server on %s stopped", config.listen)
        context.close()
