"""Common application errors, may be raised from several services"""

from cardledger.errors.base import ApplicationError


class NotFoundError(ApplicationError):
    error_code = 1404
    error = "Not found"


class InvalidId(ApplicationError):
    http_code = 422
    error_code = 1422
    error = "Invalid id"


class MissingFields(ApplicationError):
    http_code = 422
    error_code = 1423
    error = "Required fields are missing"


class AllocationFailure(ApplicationError):
    error_code = 1500
    error = "Could not persist changes"
