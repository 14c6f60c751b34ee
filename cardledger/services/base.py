"""Base service with the read operations shared by all models."""

from typing import Generic, Type, TypeVar

from cardledger.errors.common import NotFoundError
from cardledger.models.base import BaseModel
from sqlalchemy.orm import Session

M = TypeVar("M", bound=BaseModel)  # model


class BaseService(Generic[M]):
    model: Type[M]
    not_found_error: Type[NotFoundError] = NotFoundError
    db: Session

    def __init__(self, db: Session):
        self.db = db

    def get(self, obj_id: int) -> M:
        db_obj = self.db.query(self.model).filter(self.model.id == obj_id).first()
        if not db_obj:
            raise self.not_found_error(f"{self.model.__name__} id={obj_id}")
        return db_obj
