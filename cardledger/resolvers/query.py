import asyncio

import strawberry
from cardledger.errors.base import ApplicationError
from cardledger.resolvers.context import CardContext
from cardledger.resolvers.errors import as_graphql_error
from cardledger.resolvers.types import CardType
from cardledger.schemas.card import CardSchema
from strawberry.types import Info


def _cards(context: CardContext) -> list[CardSchema]:
    context.claim()
    return context.snapshot()


@strawberry.type
class Query:
    @strawberry.field(description="All cards with their addresses")
    async def card(self, info: Info[CardContext, None]) -> list[CardType]:
        try:
            snapshot = await asyncio.to_thread(_cards, info.context)
        except ApplicationError as exc:
            raise as_graphql_error(exc) from exc
        return [CardType.from_schema(card) for card in snapshot]
