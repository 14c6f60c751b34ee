"""Database connection and initialization"""

import logging
import os

from cardledger.config import Config, get_config
from cardledger.models.address import Address  # noqa: F401
from cardledger.models.base import BaseModel
from cardledger.models.card import Card, CardAssignment, CardStreet  # noqa: F401
from cardledger.models.user import User  # noqa: F401
from fastapi import Depends
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)


class DatabaseConnection:
    engine: Engine
    session_local: sessionmaker[Session]
    # Class-level flag ensures table creation runs only once per process.
    _bootstrapped: bool = False

    def __init__(self, config: Config = Depends(get_config)) -> None:
        connect_args = {}
        if config.database_url.startswith("sqlite"):
            # Ensure the database folder exists.
            os.makedirs(config.database_path.parent, exist_ok=True)
            connect_args = {"check_same_thread": False}
        self.engine = create_engine(config.database_url, connect_args=connect_args)
        self.session_local = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )
        if not self.__class__._bootstrapped:
            self.create_tables()
            self.__class__._bootstrapped = True

    def create_tables(self) -> None:
        """Create all database tables defined in models."""
        logger.info("Creating database tables...")
        BaseModel.metadata.create_all(bind=self.engine)
        logger.info("Database tables created.")

    def get_session(self) -> Session:
        """Return a new SQLAlchemy session."""
        return self.session_local()
