"""User model. Owned by the accounts side of the system, only read here."""

from cardledger.models.base import BaseModel
from sqlalchemy.orm import Mapped, mapped_column


class User(BaseModel):
    __tablename__ = "users"

    name: Mapped[str]
    group: Mapped[str] = mapped_column(index=True)
    is_admin: Mapped[bool] = mapped_column(default=False)
    # service supervisor and card secretary roles may hand out cards
    is_ss: Mapped[bool] = mapped_column(default=False)
    is_scards: Mapped[bool] = mapped_column(default=False)
