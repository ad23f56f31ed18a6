import logging
import time
from uuid import uuid4

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Receive, Scope, Send

from campus_api.errors import internal_error_response
from campus_api.logging_config import correlation_id_var

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Middleware (pure ASGI: avoids BaseHTTPMiddleware ContextVar isolation)
# ---------------------------------------------------------------------------

class RequestContextMiddleware:
    """
    Pure ASGI middleware that binds a correlation id to the request and adds
    two diagnostic response headers:

    - ``X-Correlation-ID``: echoed from ``X-Correlation-ID`` / ``X-Request-ID``
      when the caller supplies one, otherwise a fresh uuid4.
    - ``X-Response-Time-Ms``: wall-clock time for the entire request.

    Unlike ``BaseHTTPMiddleware``, this does NOT spawn a child asyncio task
    for the inner application, so the ``ContextVar`` set here is visible to
    every log record emitted while handling the request.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        correlation_id = (
            headers.get("x-correlation-id") or headers.get("x-request-id") or str(uuid4())
        )
        token = correlation_id_var.set(correlation_id)
        start = time.perf_counter()
        logger.info("Incoming request %s %s", scope["method"], scope["path"])

        response_started = False

        async def send_wrapper(message):
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                headers = list(message.get("headers", []))
                headers.append((b"x-correlation-id", correlation_id.encode()))
                headers.append((b"x-response-time-ms", str(duration_ms).encode()))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            # Answered here, inside the correlation context and the CORS layer.
            if response_started:
                raise
            logger.exception("Unhandled error processing %s %s", scope["method"], scope["path"])
            await internal_error_response()(scope, receive, send_wrapper)
        finally:
            correlation_id_var.reset(token)
