import json

from agriswarm.core.exceptions import error_body
from agriswarm.core.logger import logger
from agriswarm.core.utils_logging import request_log_extra


class ExceptionLoggingMiddleware:
    """
    ASGI middleware that logs unhandled exceptions with full stack trace and
    answers with the same structured error body the API uses elsewhere.
    If the response has already started the exception is re-raised.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        started = {"value": False}

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                started["value"] = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            logger.exception("Unhandled exception in request", extra=request_log_extra(scope))
            if started["value"]:
                raise

            payload = json.dumps(error_body("internal_error", str(exc))).encode("utf-8")
            await send({
                "type": "http.response.start",
                "status": 500,
                "headers": [
                    (b"content-type", b"application/json"),
                    (b"content-length", str(len(payload)).encode("utf-8")),
                ],
            })
            await send({"type": "http.response.body", "body": payload})
