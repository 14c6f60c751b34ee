"""GraphQL object and input types"""

from datetime import datetime
from typing import Optional

import strawberry
from cardledger.errors.common import InvalidId
from cardledger.schemas.address import AddressSchema
from cardledger.schemas.card import AssignmentSchema, CardSchema


def parse_id(value: str | int | None) -> int:
    try:
        parsed = int(str(value))
    except (TypeError, ValueError):
        raise InvalidId(value)
    if parsed <= 0:
        raise InvalidId(value)
    return parsed


@strawberry.type(name="Address")
class AddressType:
    id: strawberry.ID
    street: str
    number: Optional[str]
    neighborhood: Optional[str]
    city: Optional[str]

    @classmethod
    def from_schema(cls, address: AddressSchema) -> "AddressType":
        return cls(
            id=strawberry.ID(str(address.id)),
            street=address.street,
            number=address.number,
            neighborhood=address.neighborhood,
            city=address.city,
        )


@strawberry.type(name="AssignedUser")
class AssignedUserType:
    user_id: strawberry.ID
    date: datetime

    @classmethod
    def from_schema(cls, assignment: AssignmentSchema) -> "AssignedUserType":
        return cls(user_id=strawberry.ID(str(assignment.user_id)), date=assignment.date)


@strawberry.type(name="Card")
class CardType:
    id: strawberry.ID
    number: int
    group: str
    street: list[AddressType]
    users_assigned: list[AssignedUserType]
    start_date: Optional[datetime]
    end_date: Optional[datetime]
    comment: Optional[str]

    @classmethod
    def from_schema(cls, card: CardSchema) -> "CardType":
        return cls(
            id=strawberry.ID(str(card.id)),
            number=card.number,
            group=card.group,
            street=[AddressType.from_schema(address) for address in card.street],
            users_assigned=[
                AssignedUserType.from_schema(assignment)
                for assignment in card.users_assigned
            ],
            start_date=card.start_date,
            end_date=card.end_date,
            comment=card.comment,
        )


@strawberry.type
class CardResponse:
    message: str
    success: bool
    card: Optional[CardType] = None


@strawberry.type
class CardsResponse:
    message: str
    success: bool
    card: Optional[list[CardType]] = None


@strawberry.type
class DeleteCardResponse:
    message: str
    success: bool


@strawberry.input
class NewCardInput:
    comment: Optional[str] = None


@strawberry.input
class UpdateCardInput:
    id: strawberry.ID
    street: list[strawberry.ID] = strawberry.field(default_factory=list)


@strawberry.input
class AssignCardInput:
    user_id: strawberry.ID
    card_ids: list[strawberry.ID]


@strawberry.input
class ReturnCardInput:
    user_id: strawberry.ID
    card_id: strawberry.ID
