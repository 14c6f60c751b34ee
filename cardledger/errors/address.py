"""Address lookup errors"""

from cardledger.errors.common import NotFoundError


class AddressNotFound(NotFoundError):
    error_code = 6404
    error = "Address not found"
