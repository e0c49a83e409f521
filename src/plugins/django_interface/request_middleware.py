import uuid

import structlog

from labora_core.adapters.context.request_context import reset_access_token, set_access_token


class RequestContextMiddleware:
    """
    Starts every request without a store session token and binds
    request_id/path/method to the structlog context.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.path,
            method=request.method,
        )
        access = set_access_token(None)
        try:
            response = self.get_response(request)
        finally:
            reset_access_token(access)
            structlog.contextvars.clear_contextvars()
        response["X-Request-ID"] = request_id
        return response
