from fastapi import Header, Request

from addrbook.config import settings
from addrbook.context import CallContext
from addrbook.services.gateway import AuthorizationGateway


def get_gateway(request: Request) -> AuthorizationGateway:
    return request.app.state.gateway


def get_call_context(
    token: str | None = Header(default=None),
    x_request_timeout: float | None = Header(default=None),
) -> CallContext:
    """Build the call context from the ``token`` and ``x-request-timeout`` headers."""
    timeout = x_request_timeout if x_request_timeout is not None else settings.request_timeout_seconds
    return CallContext.with_timeout(token=token, timeout=timeout)


__all__ = ["get_call_context", "get_gateway"]
