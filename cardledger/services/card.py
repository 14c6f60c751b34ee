"""Card service. Card lifecycle: creation, street linkage, custody (assign/return) and removal.

Every committed change is followed by a notification carrying the full card
view. Uniqueness of card numbers and address links is guarded by the database,
a conflicting concurrent write is retried instead of reported.
"""

import logging
from datetime import datetime, timezone

from cardledger.config import Config
from cardledger.errors.card import (
    CardAlreadyAssigned,
    CardNotFound,
    GroupMismatch,
    NotCardOwner,
)
from cardledger.errors.common import AllocationFailure, MissingFields
from cardledger.models.card import Card, CardAssignment, CardStreet
from cardledger.schemas.card import (
    CardAssignSchema,
    CardCreateSchema,
    CardReturnSchema,
    CardStreetUpdateSchema,
)
from cardledger.services.base import BaseService
from cardledger.services.linkage import LinkageService
from cardledger.services.notifier import CardNotifier
from cardledger.services.numbering import NumberingService
from cardledger.services.user import UserService
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class CardService(BaseService[Card]):
    model = Card
    not_found_error = CardNotFound

    def __init__(
        self,
        db: Session,
        config: Config,
        user_service: UserService,
        numbering_service: NumberingService,
        linkage_service: LinkageService,
        notifier: CardNotifier,
    ):
        self.db = db
        self.config = config
        self._user_service = user_service
        self._numbering_service = numbering_service
        self._linkage_service = linkage_service
        self._notifier = notifier

    def create(self, schema: CardCreateSchema, group: str) -> Card:
        """New cards start with no addresses and nobody holding them."""
        attempts = self.config.allocation_attempts
        for attempt in range(1, attempts + 1):
            number = self._numbering_service.next_number()
            card = Card(**schema.dump(), number=number, group=group)
            self.db.add(card)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                logger.warning(
                    "Card number %d was taken concurrently (attempt %d/%d)",
                    number,
                    attempt,
                    attempts,
                )
                continue
            logger.info("Card id=%s number=%d created for group=%s", card.id, number, group)
            self._notifier.notify()
            return card
        raise AllocationFailure(f"no free card number after {attempts} attempts")

    def update(self, schema: CardStreetUpdateSchema) -> Card | None:
        """
        Toggle the given address ids on the card.

        Returns None when the card lost its last address and was deleted.
        """
        attempts = self.config.allocation_attempts
        for attempt in range(1, attempts + 1):
            card = self.get(schema.id)
            street = self._linkage_service.resolve(card, schema.street)

            if not street:
                self.db.delete(card)
                self.db.commit()
                logger.info("Card id=%s deleted, no addresses left", schema.id)
                self._notifier.notify()
                return None

            self._set_street(card, street)
            card.modified_at = _now()
            try:
                self.db.commit()
            except IntegrityError:
                # another card grabbed one of the addresses meanwhile,
                # the next round of validation reports it
                self.db.rollback()
                logger.warning(
                    "Address link conflict on card id=%s (attempt %d/%d)",
                    schema.id,
                    attempt,
                    attempts,
                )
                continue
            logger.info("Card id=%s street set to %s", card.id, street)
            self._notifier.notify()
            return card
        raise AllocationFailure(f"card id={schema.id} kept conflicting on addresses")

    def _set_street(self, card: Card, street: list[int]) -> None:
        # reuse link rows that stay, so no address is deleted and inserted in one flush
        existing = {link.address_id: link for link in card.streets}
        card.streets = [
            existing.get(address_id) or CardStreet(address_id=address_id)
            for address_id in street
        ]
        for position, link in enumerate(card.streets):
            link.position = position

    def delete(self, obj_id: int) -> int:
        """Remove the card. Deleting an absent card is not an error."""
        card = self.db.get(Card, obj_id)
        if card is not None:
            self.db.delete(card)
            self.db.commit()
            logger.info("Card id=%s deleted", obj_id)
        self._notifier.notify()
        return obj_id

    def assign(self, group: str, schema: CardAssignSchema) -> list[Card]:
        """
        Check out cards to a user of the caller's group.

        Cards are taken in order, each one committed on its own. When a card
        fails, the batch stops and cards handed out before it stay assigned.
        """
        if not schema.card_ids:
            raise MissingFields("userId and cardIds are required")
        user = self._user_service.get(schema.user_id)
        if user.group != group:
            raise GroupMismatch(f"user group={user.group}")

        now = _now()
        cards = []
        for card_id in schema.card_ids:
            card = self.get(card_id)
            # only a card nobody holds can be taken
            claimed = self.db.execute(
                update(Card)
                .where(Card.id == card_id, Card.start_date.is_(None))
                .values(start_date=now, end_date=None, modified_at=now)
                .execution_options(synchronize_session=False)
            )
            if claimed.rowcount == 0:
                raise CardAlreadyAssigned(f"card number={card.number}")
            self.db.add(CardAssignment(card_id=card_id, user_id=user.id, date=now))
            self.db.commit()
            self.db.expire(card)
            logger.info("Card id=%s assigned to user id=%s", card_id, user.id)
            cards.append(card)

        self._notifier.notify()
        return cards

    def return_card(self, schema: CardReturnSchema) -> Card:
        """Check the card back in. Only its latest holder may return it."""
        card = self.get(schema.card_id)
        last_assignment = card.assignments[-1] if card.assignments else None
        if last_assignment is None or last_assignment.user_id != schema.user_id:
            raise NotCardOwner(f"card number={card.number}")

        now = _now()
        # a concurrent return of the same card finds nothing to release
        released = self.db.execute(
            update(Card)
            .where(Card.id == card.id, Card.start_date.is_not(None))
            .values(start_date=None, end_date=now, modified_at=now)
            .execution_options(synchronize_session=False)
        )
        if released.rowcount == 0:
            self.db.rollback()
            raise NotCardOwner(f"card number={card.number}")
        card.assignments.clear()
        self.db.commit()
        self.db.expire(card)
        logger.info("Card id=%s returned by user id=%s", card.id, schema.user_id)
        self._notifier.notify()
        return card
