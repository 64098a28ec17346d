"""Access logging middleware."""

import time
import uuid
from datetime import datetime, timezone
from starlette.datastructures import Headers


def client_address(scope, headers: Headers) -> str:
    """Get the remote address, preferring the first X-Forwarded-For hop."""
    client = scope.get("client")
    client_ip = client[0] if client else "unknown"
    xff = headers.get("X-Forwarded-For")
    if xff:
        client_ip = xff.split(',')[0].strip()
    return client_ip


class AccessLogMiddleware:
    """Print one line per request.

    The response passes through untouched: no headers are added and the
    status and body are those of the wrapped app.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.time()
        headers = Headers(scope=scope)
        request_id = headers.get("X-Request-ID") or str(uuid.uuid4())

        status_code = 0
        sent_bytes = 0

        async def send_with_accounting(message):
            nonlocal status_code, sent_bytes
            if message["type"] == "http.response.start":
                status_code = message["status"]
            elif message["type"] == "http.response.body":
                sent_bytes += len(message.get("body", b""))
            await send(message)

        try:
            await self.app(scope, receive, send_with_accounting)
        finally:
            duration = time.time() - start_time
            timestamp = datetime.fromtimestamp(start_time, tz=timezone.utc).isoformat()
            print(f"ts={timestamp} req_id={request_id} method={scope['method']} path={scope['path']} "
                  f"status={status_code} bytes={sent_bytes} "
                  f"dur={duration:.6f}s remote={client_address(scope, headers)}")
