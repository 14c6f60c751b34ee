"""Change notifier. Rebuilds the full card view and pushes it to live subscribers."""

import logging

from cardledger.models.address import Address
from cardledger.models.card import Card
from cardledger.realtime.broker import CardBroker
from cardledger.schemas.address import AddressSchema
from cardledger.schemas.card import AssignmentSchema, CardSchema
from cardledger.services.address import AddressService
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def build_card_view(card: Card, addresses: dict[int, Address]) -> CardSchema:
    """Card with its street ids replaced by address records. Unknown ids are skipped."""
    return CardSchema(
        id=card.id,
        comment=card.comment,
        created_at=card.created_at,
        modified_at=card.modified_at,
        number=card.number,
        group=card.group,
        street=[
            AddressSchema.model_validate(addresses[address_id])
            for address_id in card.street
            if address_id in addresses
        ],
        users_assigned=[
            AssignmentSchema(user_id=assignment.user_id, date=assignment.date)
            for assignment in card.assignments
        ],
        start_date=card.start_date,
        end_date=card.end_date,
    )


class CardNotifier:
    def __init__(
        self,
        db: Session,
        address_service: AddressService,
        broker: CardBroker | None = None,
    ):
        self.db = db
        self._address_service = address_service
        self._broker = broker

    def view(self, card: Card) -> CardSchema:
        return build_card_view(card, self._address_service.get_by_ids(card.street))

    def views(self, cards: list[Card]) -> list[CardSchema]:
        addresses = self._address_service.get_by_ids(
            address_id for card in cards for address_id in card.street
        )
        return [build_card_view(card, addresses) for card in cards]

    def snapshot(self) -> list[CardSchema]:
        """Every card, ordered by number, with addresses resolved."""
        cards = self.db.query(Card).order_by(Card.number).all()
        return self.views(cards)

    def notify(self) -> int:
        """
        Publish a fresh snapshot. Runs after the triggering change is committed,
        so a failure here is logged and does not undo or fail the change.
        Subscribers catch up on the next notification or when they reconnect.
        """
        if self._broker is None:
            return 0
        try:
            snapshot = self.snapshot()
        except SQLAlchemyError:
            logger.exception("Could not build card snapshot for subscribers")
            return 0
        return self._broker.publish(snapshot)
