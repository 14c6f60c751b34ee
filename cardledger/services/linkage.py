"""Address linkage: an address belongs to at most one card.

Street ids sent for a card are toggled: ids already on the card are removed,
new ids are added unless another card holds them.
"""

from typing import Callable, Iterable

from cardledger.errors.card import AddressAlreadyLinked
from cardledger.models.card import Card, CardStreet
from cardledger.services.address import AddressService
from sqlalchemy.orm import Session


def toggle_streets(
    current: Iterable[int],
    candidates: Iterable[int],
    is_linked_elsewhere: Callable[[int], bool],
) -> list[int]:
    street = list(current)
    for address_id in candidates:
        if address_id in street:
            street = [linked for linked in street if linked != address_id]
        elif is_linked_elsewhere(address_id):
            raise AddressAlreadyLinked(f"address id={address_id}")
        else:
            street.append(address_id)
    return list(dict.fromkeys(street))


class LinkageService:
    def __init__(self, db: Session, address_service: AddressService):
        self.db = db
        self._address_service = address_service

    def linked_card_id(self, address_id: int, exclude_card_id: int | None = None) -> int | None:
        query = self.db.query(CardStreet.card_id).filter(
            CardStreet.address_id == address_id
        )
        if exclude_card_id is not None:
            query = query.filter(CardStreet.card_id != exclude_card_id)
        row = query.first()
        return row[0] if row else None

    def resolve(self, card: Card, candidates: list[int]) -> list[int]:
        """Compute the street list the card ends up with. Empty means the card has to go."""

        def is_linked_elsewhere(address_id: int) -> bool:
            # checked per id, in request order, so the first bad id is the one reported
            self._address_service.ensure_exist([address_id])
            return self.linked_card_id(address_id, card.id) is not None

        return toggle_streets(card.street, candidates, is_linked_elsewhere)
