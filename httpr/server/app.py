"""HTTP application serving simulated responses"""

import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.responses import Response

from httpr.core.context import Context
from httpr.reports.request_log import RequestRecord


logger = logging.getLogger(__name__)

METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

# Statuses that must not carry a body
BODYLESS_CODES = {204, 304}


async def build_record(request: Request) -> RequestRecord:
    """Capture what the request log needs from an inbound request"""
    body = await request.body()
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"

    remote_addr = ""
    if request.client:
        remote_addr = f"{request.client.host}:{request.client.port}"

    return RequestRecord(
        method=request.method,
        url=url,
        host=request.headers.get("host", ""),
        proto=f"HTTP/{request.scope.get('http_version', '1.1')}",
        remote_addr=remote_addr,
        headers=list(request.headers.items()),
        body=body,
    )


def create_app(context: Context) -> FastAPI:
    """Build the application around an explicitly constructed context"""
    app = FastAPI(title="httpr", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.context = context

    @app.api_route("/{path:path}", methods=METHODS)
    async def handle(request: Request, path: str):
        ctx: Context = request.app.state.context
        record = await build_record(request)
        ctx.log_request(record)

        if ctx.delay_seconds > 0:
            await asyncio.sleep(ctx.delay_seconds)

        status_code = ctx.simulate_failure()
        logger.debug("%s %s -> %d", record.method, record.url, status_code)

        if not ctx.echo or status_code in BODYLESS_CODES:
            return Response(status_code=status_code)

        return Response(
            content=record.body,
            status_code=status_code,
            media_type=request.headers.get("content-type"),
        )

    return app
