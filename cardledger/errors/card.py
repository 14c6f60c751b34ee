"""Card lifecycle errors"""

from cardledger.errors.base import ApplicationError
from cardledger.errors.common import NotFoundError


class CardNotFound(NotFoundError):
    error_code = 5404
    error = "Card not found"


class AddressAlreadyLinked(ApplicationError):
    error_code = 5001
    error = "Address is already linked to another card"


class CardAlreadyAssigned(ApplicationError):
    error_code = 5002
    error = "Card is already in use"


class NotCardOwner(ApplicationError):
    error_code = 5003
    error = "Card does not belong to this user"


class GroupMismatch(ApplicationError):
    http_code = 403
    error_code = 5004
    error = "Cards can only be assigned to users of your own group"
