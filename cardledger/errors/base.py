from typing import Any


class ApplicationError(Exception):
    """
    Base of every error the card services raise on purpose.

    `error` is the human readable reason, extended with details when given.
    `error_code` is stable and travels to clients next to it.
    """

    http_code: int | None = None
    error_code: int
    error: str
    where: str | None = None

    def __init__(self, details: Any | None = None, where: str | None = None):
        self.error = type(self).error if details is None else f"{type(self).error}: {details}"
        if where is not None:
            self.where = where
        super().__init__(self.error)

    def as_dict(self) -> dict:
        return {"error_code": self.error_code, "error": self.error, "where": self.where}
