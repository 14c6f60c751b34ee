import asyncio
import logging
from typing import AsyncGenerator

import strawberry
from cardledger.errors.base import ApplicationError
from cardledger.resolvers.context import CardContext
from cardledger.resolvers.errors import as_graphql_error
from cardledger.resolvers.types import CardType
from strawberry.types import Info

logger = logging.getLogger(__name__)


@strawberry.type
class Subscription:
    @strawberry.subscription(
        description="Current cards on subscribe, then all cards after every change"
    )
    async def card(
        self, info: Info[CardContext, None]
    ) -> AsyncGenerator[list[CardType], None]:
        context = info.context
        try:
            claim = context.claim()
        except ApplicationError as exc:
            raise as_graphql_error(exc) from exc

        # register first, so no change between the initial read and the stream is lost
        subscription = context.broker.subscribe()
        logger.info("User id=%s subscribed to card updates", claim.user_id)
        try:
            snapshot = await asyncio.to_thread(context.snapshot)
            yield [CardType.from_schema(card) for card in snapshot]
            async for snapshot in subscription:
                yield [CardType.from_schema(card) for card in snapshot]
        finally:
            context.broker.unsubscribe(subscription)
