"""Session token usage errors"""

from cardledger.errors.base import ApplicationError


class Unauthenticated(ApplicationError):
    http_code = 401
    error_code = 3000
    error = "Unauthenticated"


class TokenInvalid(Unauthenticated):
    error_code = 3001
    error = "Token is invalid"


class TokenMissing(Unauthenticated):
    error_code = 3002
    error = "Token is missing"


class TokenExpired(Unauthenticated):
    error_code = 3003
    error = "Session expired, log in again"


class Unauthorized(ApplicationError):
    http_code = 403
    error_code = 3101
    error = "Not allowed"
