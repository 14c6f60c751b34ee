"""Card numbering: every new card takes the lowest free positive number."""

from typing import Iterable

from cardledger.models.card import Card
from sqlalchemy.orm import Session


def find_next_number(numbers: Iterable[int]) -> int:
    """
    Return the first gap in the sequence of existing card numbers.

    {1, 2, 4} -> 3
    {1, 2, 3} -> 4
    {}        -> 1
    {2, 3}    -> 1
    """
    # 0 is a sentinel so that a missing 1 counts as the first gap
    unique_numbers = [0] + sorted({int(n) for n in numbers if int(n) > 0})
    for current, following in zip(unique_numbers, unique_numbers[1:]):
        if following != current + 1:
            return current + 1
    return unique_numbers[-1] + 1


class NumberingService:
    def __init__(self, db: Session):
        self.db = db

    def existing_numbers(self) -> list[int]:
        return [number for (number,) in self.db.query(Card.number).distinct().all()]

    def next_number(self) -> int:
        return find_next_number(self.existing_numbers())
