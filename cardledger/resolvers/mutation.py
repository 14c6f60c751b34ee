"""Card mutations. Failures never escape as GraphQL errors, they are reported in the envelope.

Database work runs in a worker thread so live subscriptions on the event loop
keep flowing while a mutation is in progress.
"""

import asyncio

import strawberry
from cardledger.errors.base import ApplicationError
from cardledger.resolvers.context import CardContext
from cardledger.resolvers.errors import failed
from cardledger.resolvers.types import (
    AssignCardInput,
    CardResponse,
    CardsResponse,
    CardType,
    DeleteCardResponse,
    NewCardInput,
    ReturnCardInput,
    UpdateCardInput,
    parse_id,
)
from cardledger.schemas.card import (
    CardAssignSchema,
    CardCreateSchema,
    CardReturnSchema,
    CardSchema,
    CardStreetUpdateSchema,
)
from cardledger.services.token import TokenService
from sqlalchemy.exc import SQLAlchemyError
from strawberry.types import Info


def _create(context: CardContext, new_card: NewCardInput) -> CardSchema:
    claim = context.claim()
    with context.services() as services:
        card = services.card_service.create(
            CardCreateSchema(comment=new_card.comment), group=claim.group
        )
        return services.notifier.view(card)


def _update(context: CardContext, update_card_input: UpdateCardInput) -> CardSchema | None:
    context.claim()
    schema = CardStreetUpdateSchema(
        id=parse_id(update_card_input.id),
        street=[parse_id(address_id) for address_id in update_card_input.street],
    )
    with context.services() as services:
        card = services.card_service.update(schema)
        return services.notifier.view(card) if card is not None else None


def _delete(context: CardContext, id: strawberry.ID) -> None:
    context.claim()
    card_id = parse_id(id)
    with context.services() as services:
        services.card_service.delete(card_id)


def _assign(
    context: CardContext, assign_card_input: AssignCardInput
) -> tuple[list[CardSchema], str]:
    claim = TokenService.require_card_assigner(context.claim())
    schema = CardAssignSchema(
        user_id=parse_id(assign_card_input.user_id),
        card_ids=[parse_id(card_id) for card_id in assign_card_input.card_ids],
    )
    with context.services() as services:
        cards = services.card_service.assign(claim.group, schema)
        views = services.notifier.views(cards)
        return views, services.user_service.get(schema.user_id).name


def _return(context: CardContext, return_card_input: ReturnCardInput) -> CardSchema:
    context.claim()
    schema = CardReturnSchema(
        user_id=parse_id(return_card_input.user_id),
        card_id=parse_id(return_card_input.card_id),
    )
    with context.services() as services:
        card = services.card_service.return_card(schema)
        return services.notifier.view(card)


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create_card(
        self, info: Info[CardContext, None], new_card: NewCardInput
    ) -> CardResponse:
        try:
            view = await asyncio.to_thread(_create, info.context, new_card)
        except (ApplicationError, SQLAlchemyError) as exc:
            return failed(CardResponse, "Error creating card", exc)
        return CardResponse(
            message="Card created.", success=True, card=CardType.from_schema(view)
        )

    @strawberry.mutation
    async def update_card(
        self, info: Info[CardContext, None], update_card_input: UpdateCardInput
    ) -> CardResponse:
        try:
            view = await asyncio.to_thread(_update, info.context, update_card_input)
        except (ApplicationError, SQLAlchemyError) as exc:
            return failed(CardResponse, "Error updating card", exc)
        if view is None:
            return CardResponse(
                message="Card deleted because it has no linked addresses.",
                success=True,
                card=None,
            )
        return CardResponse(
            message="Card updated.", success=True, card=CardType.from_schema(view)
        )

    @strawberry.mutation
    async def delete_card(
        self, info: Info[CardContext, None], id: strawberry.ID
    ) -> DeleteCardResponse:
        try:
            await asyncio.to_thread(_delete, info.context, id)
        except (ApplicationError, SQLAlchemyError) as exc:
            return failed(DeleteCardResponse, "Error deleting card", exc)
        return DeleteCardResponse(message="Card deleted.", success=True)

    @strawberry.mutation
    async def assign_card(
        self, info: Info[CardContext, None], assign_card_input: AssignCardInput
    ) -> CardsResponse:
        try:
            views, user_name = await asyncio.to_thread(
                _assign, info.context, assign_card_input
            )
        except (ApplicationError, SQLAlchemyError) as exc:
            return failed(CardsResponse, "Error assigning cards", exc)
        return CardsResponse(
            message=f"Cards assigned to user {user_name}.",
            success=True,
            card=[CardType.from_schema(view) for view in views],
        )

    @strawberry.mutation
    async def return_card(
        self, info: Info[CardContext, None], return_card_input: ReturnCardInput
    ) -> CardResponse:
        try:
            view = await asyncio.to_thread(_return, info.context, return_card_input)
        except (ApplicationError, SQLAlchemyError) as exc:
            return failed(CardResponse, "Error returning card", exc)
        return CardResponse(
            message="Card returned.", success=True, card=CardType.from_schema(view)
        )
