"""DTO for Card"""

from datetime import datetime

from cardledger.schemas.address import AddressSchema
from cardledger.schemas.base import BaseReadSchema, BaseSchema, BaseUpdateSchema


class CardCreateSchema(BaseUpdateSchema):
    pass


class CardStreetUpdateSchema(BaseSchema):
    id: int
    # address ids to toggle on the card
    street: list[int] = []


class CardAssignSchema(BaseSchema):
    user_id: int
    card_ids: list[int]


class CardReturnSchema(BaseSchema):
    user_id: int
    card_id: int


class AssignmentSchema(BaseSchema):
    user_id: int
    date: datetime


class CardSchema(BaseReadSchema):
    number: int
    group: str
    street: list[AddressSchema]
    users_assigned: list[AssignmentSchema]
    start_date: datetime | None = None
    end_date: datetime | None = None
