"""Token service. Verifies session tokens and exposes the claims mutations rely on."""

import logging
import time
from datetime import timedelta

import jwt
from cardledger.config import Config
from cardledger.errors.token import TokenExpired, TokenInvalid, TokenMissing, Unauthorized
from cardledger.models.user import User
from cardledger.schemas.token import SessionClaim
from pydantic import ValidationError

logger = logging.getLogger(__name__)


class TokenService:
    ALGORITHM = "HS256"
    TOKEN_TTL = timedelta(hours=1)

    @staticmethod
    def decode_claim(token: str, secret_key: str) -> SessionClaim:
        """Decode the session claim without DB lookup."""
        try:
            payload = jwt.decode(
                token,
                secret_key,
                algorithms=[TokenService.ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpired
        except jwt.PyJWTError as e:
            # also covers an unusable key, e.g. an empty secret
            raise TokenInvalid(str(e))
        try:
            return SessionClaim.model_validate(payload)
        except ValidationError:
            raise TokenInvalid("malformed claims")

    @staticmethod
    def require_card_assigner(claim: SessionClaim) -> SessionClaim:
        if not claim.can_assign_cards:
            raise Unauthorized("you are not allowed to assign cards")
        return claim

    def __init__(self, config: Config):
        self.config = config

    def get_claim(self, token: str | None) -> SessionClaim:
        if not token:
            raise TokenMissing
        return self.decode_claim(token, self.config.secret_key or "")

    def _generate_new_token(self, user: User, ttl: timedelta | None = None) -> str:
        """Sign a session token for the user. Logging in happens elsewhere, this is for tooling and tests."""
        now = int(time.time())
        data = {
            "sub": str(user.id),
            "group": user.group,
            "isAdmin": user.is_admin,
            "isSS": user.is_ss,
            "isSCards": user.is_scards,
            "iat": now,
            "exp": now + int((ttl or self.TOKEN_TTL).total_seconds()),
        }
        return jwt.encode(data, self.config.secret_key, algorithm=self.ALGORITHM)
