"""HTTP basic authentication middleware."""
import base64
import binascii
import secrets
from typing import Optional, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

from calculator_client_server.common.logger import logger

CHALLENGE = 'Basic realm="Restricted Area"'


def decode_credentials(header: str) -> Optional[Tuple[str, str]]:
    """
    Decode the ``username:password`` pair of a Basic authorization header.

    :param str header: Value of the Authorization header, "Basic <base64>"

    :return: (username, password), or None if the value cannot be decoded
    :rtype: Optional[Tuple[str, str]]
    """
    _, _, encoded = header.partition(" ")
    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode()
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return username, password


class BasicAuthMiddleware(BaseHTTPMiddleware):
    """
    Reject requests without valid basic auth credentials.

    - No header, or a scheme other than Basic: 401 "Authentication required"
    - Wrong or undecodable credentials: 401 "Invalid credentials"
    - Valid credentials: the request passes through untouched

    Both rejections carry the WWW-Authenticate challenge header.
    """

    def __init__(self, app: ASGIApp, username: str, password: str) -> None:
        super().__init__(app)
        self.username = username
        self.password = password

    def _unauthorized(self, detail: str) -> Response:
        return PlainTextResponse(detail, status_code=401, headers={"WWW-Authenticate": CHALLENGE})

    def _is_valid(self, credentials: Tuple[str, str]) -> bool:
        username, password = credentials
        # Evaluate both comparisons so timing does not reveal which one failed
        user_ok = secrets.compare_digest(username.encode(), self.username.encode())
        pass_ok = secrets.compare_digest(password.encode(), self.password.encode())
        return user_ok and pass_ok

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        auth: str = request.headers.get("authorization", "")

        if not auth.startswith("Basic "):
            logger.warning(f"🔒 Missing credentials for {request.method} {request.url.path}")
            return self._unauthorized("Authentication required")

        credentials = decode_credentials(auth)
        if credentials is None or not self._is_valid(credentials):
            logger.warning(f"🔒❌ Invalid credentials for {request.method} {request.url.path}")
            return self._unauthorized("Invalid credentials")

        return await call_next(request)
