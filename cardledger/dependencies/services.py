"""Service dependency providers."""

from cardledger.config import Config
from cardledger.realtime.broker import CardBroker
from sqlalchemy.orm import Session
from starlette.requests import HTTPConnection


class ServiceContainer:
    """Request-scoped service container."""

    def __init__(self, db: Session, config: Config, broker: CardBroker | None = None):
        self.db = db
        self.config = config
        self.broker = broker
        self._user_service = None
        self._address_service = None
        self._numbering_service = None
        self._linkage_service = None
        self._notifier = None
        self._card_service = None

    @property
    def user_service(self):
        if self._user_service is None:
            from cardledger.services.user import UserService

            self._user_service = UserService(db=self.db)
        return self._user_service

    @property
    def address_service(self):
        if self._address_service is None:
            from cardledger.services.address import AddressService

            self._address_service = AddressService(db=self.db)
        return self._address_service

    @property
    def numbering_service(self):
        if self._numbering_service is None:
            from cardledger.services.numbering import NumberingService

            self._numbering_service = NumberingService(db=self.db)
        return self._numbering_service

    @property
    def linkage_service(self):
        if self._linkage_service is None:
            from cardledger.services.linkage import LinkageService

            self._linkage_service = LinkageService(
                db=self.db, address_service=self.address_service
            )
        return self._linkage_service

    @property
    def notifier(self):
        if self._notifier is None:
            from cardledger.services.notifier import CardNotifier

            self._notifier = CardNotifier(
                db=self.db,
                address_service=self.address_service,
                broker=self.broker,
            )
        return self._notifier

    @property
    def card_service(self):
        if self._card_service is None:
            from cardledger.services.card import CardService

            self._card_service = CardService(
                db=self.db,
                config=self.config,
                user_service=self.user_service,
                numbering_service=self.numbering_service,
                linkage_service=self.linkage_service,
                notifier=self.notifier,
            )
        return self._card_service


def get_broker(connection: HTTPConnection) -> CardBroker:
    return connection.app.state.broker
