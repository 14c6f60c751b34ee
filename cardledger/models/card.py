"""Card model. A physical card that covers a set of addresses and is checked out to users."""

from datetime import datetime
from typing import List, Optional

from cardledger.models.base import BaseModel
from sqlalchemy import DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship


class CardStreet(BaseModel):
    __tablename__ = "card_streets"

    card_id: Mapped[int] = mapped_column(
        ForeignKey("cards.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # an address may be linked to one card only
    address_id: Mapped[int] = mapped_column(
        ForeignKey("addresses.id"), nullable=False, unique=True
    )
    position: Mapped[int] = mapped_column(default=0)

    card: Mapped["Card"] = relationship(back_populates="streets")


class CardAssignment(BaseModel):
    __tablename__ = "card_assignments"

    card_id: Mapped[int] = mapped_column(
        ForeignKey("cards.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    card: Mapped["Card"] = relationship(back_populates="assignments")


class Card(BaseModel):
    __tablename__ = "cards"

    number: Mapped[int] = mapped_column(unique=True, index=True)
    group: Mapped[str] = mapped_column(index=True)

    # custody cycle: start_date is set while the card is checked out
    start_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime, nullable=True, default=None
    )
    end_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime, nullable=True, default=None
    )

    streets: Mapped[List[CardStreet]] = relationship(
        back_populates="card",
        cascade="all, delete-orphan",
        order_by=CardStreet.position,
    )
    assignments: Mapped[List[CardAssignment]] = relationship(
        back_populates="card",
        cascade="all, delete-orphan",
        order_by=CardAssignment.id,
    )

    @property
    def street(self) -> list[int]:
        return [link.address_id for link in self.streets]
