"""Address model. Street records that cards are linked to."""

from typing import Optional

from cardledger.models.base import BaseModel
from sqlalchemy.orm import Mapped


class Address(BaseModel):
    __tablename__ = "addresses"

    street: Mapped[str]
    number: Mapped[Optional[str]]
    neighborhood: Mapped[Optional[str]]
    city: Mapped[Optional[str]]
