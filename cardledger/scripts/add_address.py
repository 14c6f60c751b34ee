"""Helper CLI to register an Address that cards can be linked to.

Usage:
    python -m cardledger.scripts.add_address --street "Rua das Flores" --number 12 --city Lisbon
"""

from __future__ import annotations

import argparse
import logging

from cardledger.config import get_config
from cardledger.db import DatabaseConnection
from cardledger.models.address import Address
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Add an Address")
    parser.add_argument("--street", type=str, required=True)
    parser.add_argument("--number", type=str, required=False)
    parser.add_argument("--neighborhood", type=str, required=False)
    parser.add_argument("--city", type=str, required=False)
    return parser.parse_args()


def add_address(session: Session, **fields) -> Address:
    address = Address(**fields)
    session.add(address)
    session.commit()
    session.refresh(address)
    logger.info("Created address id=%s street=%s", address.id, address.street)
    return address


def main() -> None:
    args = parse_args()
    db = DatabaseConnection(config=get_config())
    session = db.get_session()
    try:
        add_address(
            session,
            street=args.street,
            number=args.number,
            neighborhood=args.neighborhood,
            city=args.city,
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
