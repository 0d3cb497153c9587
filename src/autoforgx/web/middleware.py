import time
from uuid import uuid4

import structlog
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


async def request_context_middleware(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """Bind a request id to the log context and log one line per request.

    A client-supplied X-Request-ID is reused; the id is echoed on the response.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)

    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "request_completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    response.headers[REQUEST_ID_HEADER] = request_id
    return response
