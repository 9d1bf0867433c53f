import time

from agriswarm.core.logger import logger
from agriswarm.core.utils_logging import generate_request_id, request_log_extra

REQUEST_ID_HEADER = b"x-request-id"


def _incoming_request_id(scope):
    for name, value in scope.get("headers", []):
        if name.lower() == REQUEST_ID_HEADER and value:
            return value.decode("latin-1")
    return None


class RequestLoggingMiddleware:
    """
    ASGI middleware that tags each HTTP request with an id (the caller's
    X-Request-ID when present), echoes it on the response and logs the
    request with its status and duration.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request_id = _incoming_request_id(scope) or generate_request_id()
        scope["request_id"] = request_id

        start = time.perf_counter()
        logger.info("Incoming request", extra=request_log_extra(scope))

        response = {"status": None}

        async def send_with_request_id(message):
            if message["type"] == "http.response.start":
                response["status"] = message.get("status", 0)
                message["headers"] = [
                    *message.get("headers", []),
                    (REQUEST_ID_HEADER, request_id.encode("latin-1")),
                ]
            await send(message)

        await self.app(scope, receive, send_with_request_id)

        logger.info(
            "Request completed",
            extra=request_log_extra(
                scope,
                status_code=response["status"],
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            ),
        )
