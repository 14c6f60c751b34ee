"""Helper CLI to add or update a User for local runs.

Usage examples:
    python -m cardledger.scripts.add_user --name alice --group north --ss
    python -m cardledger.scripts.add_user --id 7 --name bob --group north

Users normally come from the accounts side of the system; this only upserts
the fields cards rely on (group and role flags).
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional

from cardledger.config import get_config
from cardledger.db import DatabaseConnection
from cardledger.models.user import User
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Upsert a User")
    parser.add_argument("--id", type=int, required=False, help="User id (optional)")
    parser.add_argument("--name", type=str, required=True, help="User name")
    parser.add_argument("--group", type=str, required=True, help="User group")
    parser.add_argument("--admin", action="store_true", help="Grant admin role")
    parser.add_argument("--ss", action="store_true", help="Grant service supervisor role")
    parser.add_argument("--scards", action="store_true", help="Grant card secretary role")
    return parser.parse_args()


def upsert_user(
    session: Session,
    *,
    user_id: Optional[int],
    name: str,
    group: str,
    is_admin: bool = False,
    is_ss: bool = False,
    is_scards: bool = False,
) -> User:
    existing: Optional[User] = None
    if user_id is not None:
        existing = session.query(User).filter_by(id=user_id).first()
    if existing is None:
        existing = session.query(User).filter(User.name.ilike(name)).first()

    user = existing or User(name=name, group=group)
    if existing is None and user_id is not None:
        # Assign explicit id only if provided
        user.id = user_id
    user.name = name
    user.group = group
    user.is_admin = is_admin
    user.is_ss = is_ss
    user.is_scards = is_scards
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info(
        "%s user id=%s name=%s group=%s",
        "Created" if existing is None else "Updated",
        user.id,
        user.name,
        user.group,
    )
    return user


def main() -> None:
    args = parse_args()
    # Create config explicitly for CLI usage (bypass FastAPI Depends)
    db = DatabaseConnection(config=get_config())
    session = db.get_session()
    try:
        upsert_user(
            session,
            user_id=args.id,
            name=args.name,
            group=args.group,
            is_admin=args.admin,
            is_ss=args.ss,
            is_scards=args.scards,
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
