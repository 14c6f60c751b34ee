"""Per-operation GraphQL context"""

from contextlib import contextmanager
from typing import Iterator

from cardledger.config import Config, get_config
from cardledger.db import DatabaseConnection
from cardledger.dependencies.services import ServiceContainer, get_broker
from cardledger.middlewares.token import read_session_token
from cardledger.realtime.broker import CardBroker
from cardledger.schemas.card import CardSchema
from cardledger.schemas.token import SessionClaim
from cardledger.services.token import TokenService
from cardledger.uow import UnitOfWork
from fastapi import Depends
from strawberry.fastapi import BaseContext


class CardContext(BaseContext):
    def __init__(self, db_conn: DatabaseConnection, config: Config, broker: CardBroker):
        super().__init__()
        self.db_conn = db_conn
        self.config = config
        self.broker = broker

    @property
    def session_token(self) -> str | None:
        token = read_session_token(self.request, self.config)
        if token:
            return token
        # graphql-transport-ws clients may send it in the connection_init payload
        connection_params = getattr(self, "connection_params", None)
        if isinstance(connection_params, dict):
            return connection_params.get("token")
        return None

    def claim(self) -> SessionClaim:
        """Authorization guard, raises when the session token is missing or invalid."""
        return TokenService(self.config).get_claim(self.session_token)

    @contextmanager
    def services(self) -> Iterator[ServiceContainer]:
        with UnitOfWork(self.db_conn.get_session()) as uow:
            yield ServiceContainer(uow, self.config, self.broker)

    def snapshot(self) -> list[CardSchema]:
        with self.services() as services:
            return services.notifier.snapshot()


def get_context(
    db_conn: DatabaseConnection = Depends(),
    config: Config = Depends(get_config),
    broker: CardBroker = Depends(get_broker),
) -> CardContext:
    return CardContext(db_conn=db_conn, config=config, broker=broker)
