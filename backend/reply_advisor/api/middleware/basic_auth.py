from __future__ import annotations

import base64
import binascii
import secrets
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import PlainTextResponse

from reply_advisor.config import settings
from reply_advisor.utils.logging import get_logger

if TYPE_CHECKING:
    from fastapi import Request
    from starlette.types import ASGIApp

logger = get_logger(__name__)

CONFIGURATION_ERROR_BODY = (
    "Configuration Error: APP_BASIC_AUTH_USER and APP_BASIC_AUTH_PASSWORD must be set."
)


def decode_basic_credentials(header: str | None) -> tuple[bytes, bytes] | None:
    """Return (user, password) from an `Authorization: Basic ...` header value.

    The decoded payload is split at the first colon, so passwords may contain
    colons. Returns None for anything that is not well-formed Basic credentials.
    """
    if not header:
        return None
    scheme, _, encoded = header.strip().partition(" ")
    if scheme.lower() != "basic" or not encoded.strip():
        return None
    try:
        decoded = base64.b64decode(encoded.strip(), validate=True)
    except (binascii.Error, ValueError):
        return None
    user, sep, password = decoded.partition(b":")
    if not sep:
        return None
    return user, password


def credentials_match(provided: tuple[bytes, bytes] | None, user: str, password: str) -> bool:
    if provided is None:
        return False
    # Both comparisons always run
    user_ok = secrets.compare_digest(provided[0], user.encode("utf-8"))
    password_ok = secrets.compare_digest(provided[1], password.encode("utf-8"))
    return user_ok and password_ok


class BasicAuthMiddleware(BaseHTTPMiddleware):
    """Require HTTP Basic credentials on every request.

    Credentials are read from settings on each request and nothing is cached.
    Missing server-side credentials reject every request with 500.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next):
        expected_user = settings.basic_auth_user
        expected_password = settings.basic_auth_password

        if not expected_user or not expected_password:
            logger.error("Basic auth credentials are not configured")
            return PlainTextResponse(CONFIGURATION_ERROR_BODY, status_code=500)

        provided = decode_basic_credentials(request.headers.get("authorization"))
        if credentials_match(provided, expected_user, expected_password):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        logger.warning(
            "Rejected unauthenticated request",
            extra={
                "path": request.url.path,
                "method": request.method,
                "ip": client_ip,
                "credentials_present": provided is not None,
            },
        )
        return PlainTextResponse(
            "Authentication required",
            status_code=401,
            headers={"WWW-Authenticate": f'Basic realm="{settings.basic_auth_realm}"'},
        )
