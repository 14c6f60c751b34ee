"""User lookup errors"""

from cardledger.errors.common import NotFoundError


class UserNotFound(NotFoundError):
    error_code = 4404
    error = "User not found"
