"""User service. Users are managed elsewhere, cards only look them up."""

from cardledger.errors.user import UserNotFound
from cardledger.models.user import User
from cardledger.services.base import BaseService


class UserService(BaseService[User]):
    model = User
    not_found_error = UserNotFound
