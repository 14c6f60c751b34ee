"""Reads the session token from a request or WebSocket handshake"""

from cardledger.config import Config
from starlette.requests import HTTPConnection


def read_session_token(connection: HTTPConnection | None, config: Config) -> str | None:
    """Cookie set by the login flow first, then the x-token header used by API clients."""
    if connection is None:
        return None
    token = connection.cookies.get(config.token_cookie_name)
    if token:
        return token
    return connection.headers.get("x-token")
