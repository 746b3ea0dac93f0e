# =============================================================================
# app/middleware.py - Request Body Size Limit
# =============================================================================
# Caps JSON and form-encoded request bodies at MAX_REQUEST_BODY_MB before any
# route handler or image codec sees them. Multipart uploads pass through;
# their image part is checked by the stored-image codec instead.
#
# Usage (in main.py, before CORSMiddleware so rejections carry CORS headers):
#   app.add_middleware(RequestBodyLimitMiddleware, max_body_bytes=..., max_mb=10)
# =============================================================================

import logging

from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.exceptions import RequestTooLargeError

logger = logging.getLogger(__name__)


class RequestBodyLimitMiddleware:
    """
    Reject non-multipart bodies larger than the configured ceiling with 413.

    The declared Content-Length is checked first. Bodies without one
    (chunked transfer) are counted as they arrive and buffered up to the
    ceiling, then replayed to the application.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int, max_mb: int):
        self.app = app
        self.max_body_bytes = max_body_bytes
        self.max_mb = max_mb

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        if headers.get("content-type", "").lower().startswith("multipart/"):
            await self.app(scope, receive, send)
            return

        content_length = headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_body_bytes:
            await self._reject(int(content_length), scope, receive, send)
            return

        messages: list[Message] = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > self.max_body_bytes:
                await self._reject(received, scope, receive, send)
                return
            more_body = message.get("more_body", False)

        async def replay() -> Message:
            if messages:
                return messages.pop(0)
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, size_bytes: int, scope: Scope, receive: Receive, send: Send) -> None:
        logger.warning(
            f"Rejected {scope['method']} {scope['path']}: body exceeds {self.max_mb} MB "
            f"({size_bytes} bytes received or declared)"
        )
        exc = RequestTooLargeError(size_bytes, self.max_mb)
        response = JSONResponse(status_code=exc.status_code, content=exc.to_dict())
        await response(scope, receive, send)
