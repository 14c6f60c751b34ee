"""Base for all ORM models"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class BaseModel(DeclarativeBase):
    __abstract__ = True

    id: Mapped[int] = mapped_column(primary_key=True)
    comment: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=func.now(), nullable=False
    )
    # services stamp this on every lifecycle change
    modified_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    def __repr__(self):
        values = ", ".join(
            f"{column.key}={getattr(self, column.key)!r}"
            for column in self.__mapper__.column_attrs
        )
        return f"<{type(self).__name__}({values})>"
