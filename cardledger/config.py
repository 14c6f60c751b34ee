"""Application configuration"""

from dataclasses import dataclass, field
from os import getenv
from pathlib import Path

DEFAULT_CORS_ORIGINS = "http://localhost:5173"


@dataclass
class Config:
    secret_key: str | None = field(default=getenv("CARDLEDGER_SECRET_KEY", ""))

    app_name: str = "cardledger"
    app_version: str = "0.1.0"

    # session credential is read from this cookie, or from the x-token header
    token_cookie_name: str = "access_token"

    cors_origins: list[str] = field(
        default_factory=lambda: [
            origin.strip()
            for origin in getenv(
                "CARDLEDGER_CORS_ORIGINS", DEFAULT_CORS_ORIGINS
            ).split(",")
            if origin.strip()
        ]
    )

    # how many times create/update retry after a unique constraint conflict
    allocation_attempts: int = field(
        default=int(getenv("CARDLEDGER_ALLOCATION_ATTEMPTS", "5"))
    )
    # snapshots buffered per live subscriber before it is considered stale
    subscriber_queue_size: int = field(
        default=int(getenv("CARDLEDGER_SUBSCRIBER_QUEUE_SIZE", "16"))
    )

    # server process, read by `python -m cardledger`
    host: str = field(default=getenv("HOST", "0.0.0.0"))
    port: int = field(default=int(getenv("PORT", "8000")))
    workers: int = field(default=int(getenv("WORKERS", "1")))

    # Optional database URL for Postgres or other databases
    database_url_env: str | None = field(
        default=getenv("CARDLEDGER_DATABASE_URL", None)
    )

    @property
    def database_path(self) -> Path:
        return Path("./data/") / Path(f"{self.app_name}.db")

    @property
    def database_url(self) -> str:
        # Use provided DATABASE_URL if available, else fall back to SQLite file
        if self.database_url_env:
            return self.database_url_env
        return f"sqlite:///{self.database_path}"


def get_config():
    return Config()
