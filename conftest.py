"""Test configuration and shared fixtures"""

import os
from datetime import timedelta

import pytest

TEST_SECRET_KEY = "cardledger-test-secret-key-not-for-production"

# the app refuses to start without a secret, it is read when cardledger.config is imported
os.environ.setdefault("CARDLEDGER_SECRET_KEY", TEST_SECRET_KEY)

from cardledger.app import app  # noqa: E402
from cardledger.config import Config, get_config  # noqa: E402
from cardledger.db import DatabaseConnection  # noqa: E402
from cardledger.scripts.add_address import add_address  # noqa: E402
from cardledger.scripts.add_user import upsert_user  # noqa: E402
from cardledger.services.token import TokenService  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

CARD_FIELDS = """
    id
    number
    group
    comment
    startDate
    endDate
    street { id street number neighborhood city }
    usersAssigned { userId date }
"""


class CardsClient:
    """Thin wrapper sending card operations to the GraphQL endpoint"""

    def __init__(self, client: TestClient):
        self.client = client

    def execute(self, query: str, variables: dict | None = None, token: str | None = None) -> dict:
        headers = {"x-token": token} if token else {}
        r = self.client.post(
            "/graphql",
            json={"query": query, "variables": variables or {}},
            headers=headers,
        )
        assert r.status_code == 200, r.text
        return r.json()

    def cards(self, token: str) -> list[dict]:
        body = self.execute(f"query {{ card {{ {CARD_FIELDS} }} }}", token=token)
        assert "errors" not in body, body
        return body["data"]["card"]

    def card(self, token: str, card_id: str) -> dict | None:
        return next((c for c in self.cards(token) if c["id"] == card_id), None)

    def create(self, token: str, comment: str | None = None) -> dict:
        body = self.execute(
            f"""
            mutation CreateCard($newCard: NewCardInput!) {{
                createCard(newCard: $newCard) {{ message success card {{ {CARD_FIELDS} }} }}
            }}
            """,
            {"newCard": {"comment": comment}},
            token,
        )
        return body["data"]["createCard"]

    def update(self, token: str, card_id, street: list) -> dict:
        body = self.execute(
            f"""
            mutation UpdateCard($input: UpdateCardInput!) {{
                updateCard(updateCardInput: $input) {{ message success card {{ {CARD_FIELDS} }} }}
            }}
            """,
            {"input": {"id": str(card_id), "street": [str(s) for s in street]}},
            token,
        )
        return body["data"]["updateCard"]

    def delete(self, token: str, card_id) -> dict:
        body = self.execute(
            """
            mutation DeleteCard($id: ID!) {
                deleteCard(id: $id) { message success }
            }
            """,
            {"id": str(card_id)},
            token,
        )
        return body["data"]["deleteCard"]

    def assign(self, token: str, user_id, card_ids: list) -> dict:
        body = self.execute(
            f"""
            mutation AssignCard($input: AssignCardInput!) {{
                assignCard(assignCardInput: $input) {{ message success card {{ {CARD_FIELDS} }} }}
            }}
            """,
            {"input": {"userId": str(user_id), "cardIds": [str(c) for c in card_ids]}},
            token,
        )
        return body["data"]["assignCard"]

    def return_card(self, token: str, user_id, card_id) -> dict:
        body = self.execute(
            f"""
            mutation ReturnCard($input: ReturnCardInput!) {{
                returnCard(returnCardInput: $input) {{ message success card {{ {CARD_FIELDS} }} }}
            }}
            """,
            {"input": {"userId": str(user_id), "cardId": str(card_id)}},
            token,
        )
        return body["data"]["returnCard"]


@pytest.fixture(scope="class")
def test_config():
    return Config(
        # overwrite application name so it will use another database file
        app_name="cardledger-test",
        secret_key=TEST_SECRET_KEY,
        database_url_env=None,
    )


# each test class have it's own empty database
@pytest.fixture(scope="class")
def db_conn(test_config: Config):
    db_conn = DatabaseConnection(config=test_config)
    db_conn.create_tables()
    yield db_conn
    db_conn.engine.dispose()
    # clean up test database file after tests
    if os.path.exists(test_config.database_path):
        os.remove(test_config.database_path)


@pytest.fixture(scope="class")
def test_app(test_config: Config, db_conn: DatabaseConnection):
    app.dependency_overrides = {get_config: lambda: test_config}
    client = TestClient(app)
    yield client
    app.dependency_overrides = {}


@pytest.fixture(scope="class")
def cards_api(test_app: TestClient) -> CardsClient:
    return CardsClient(test_app)


@pytest.fixture(scope="class")
def make_user(db_conn: DatabaseConnection):
    """Create a user directly in the database"""

    def f(name: str, group: str = "north", **roles):
        with db_conn.get_session() as session:
            return upsert_user(session, user_id=None, name=name, group=group, **roles)

    return f


@pytest.fixture(scope="class")
def make_address(db_conn: DatabaseConnection):
    """Create an address directly in the database"""

    def f(street: str, **fields):
        with db_conn.get_session() as session:
            return add_address(session, street=street, **fields)

    return f


@pytest.fixture(scope="class")
def token_factory(test_config: Config):
    """Sign a session token for any user"""

    def f(user, ttl: timedelta | None = None) -> str:
        return TokenService(test_config)._generate_new_token(user, ttl)

    return f
