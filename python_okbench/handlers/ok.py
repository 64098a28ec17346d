"""Constant response handler."""

from starlette.responses import Response


OK_STATUS = 200
OK_BODY = b"ok"


async def respond_ok(scope, receive, send):
    """Answer any HTTP request with 200 and the body ``ok``.

    Method, path, query string, headers and body are never looked at.
    """
    if scope["type"] != "http":
        return

    response = Response(content=OK_BODY, status_code=OK_STATUS)
    await response(scope, receive, send)
