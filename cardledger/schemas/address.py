"""DTO for Address"""

from cardledger.schemas.base import BaseReadSchema


class AddressSchema(BaseReadSchema):
    street: str
    number: str | None = None
    neighborhood: str | None = None
    city: str | None = None
