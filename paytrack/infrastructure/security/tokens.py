"""JWT issuance and verification"""

import uuid
from datetime import datetime, timedelta, timezone
import jwt
from jwt.exceptions import PyJWTError
from paytrack.config import settings
from paytrack.domain.exceptions import AuthenticationError

ACCESS_PURPOSE = "access"
LINK_PURPOSE = "link_google"


class TokenService:
    """Signs and verifies HS256 tokens carrying a user id"""

    def __init__(
        self,
        secret: str | None = None,
        algorithm: str | None = None,
        expire_minutes: int | None = None,
    ):
        self.secret = secret or settings.jwt_secret
        self.algorithm = algorithm or settings.jwt_algorithm
        self.expire_minutes = expire_minutes or settings.jwt_expire_minutes

    def _encode(self, user_id: uuid.UUID, purpose: str, lifetime: timedelta) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "purpose": purpose,
            "iat": now,
            "exp": now + lifetime,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def _decode(self, token: str, purpose: str) -> uuid.UUID:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
            if payload.get("purpose") != purpose:
                raise AuthenticationError("Token not valid for this operation")
            return uuid.UUID(payload["sub"])
        except (PyJWTError, KeyError, ValueError) as e:
            raise AuthenticationError("Invalid or expired token") from e

    def issue_access_token(self, user_id: uuid.UUID) -> str:
        return self._encode(user_id, ACCESS_PURPOSE, timedelta(minutes=self.expire_minutes))

    def verify_access_token(self, token: str) -> uuid.UUID:
        """
        Resolve a bearer token to a user id.

        Raises:
            AuthenticationError: bad signature, expired, or wrong purpose
        """
        return self._decode(token, ACCESS_PURPOSE)

    def issue_link_state(self, user_id: uuid.UUID) -> str:
        """Short-lived OAuth `state` value identifying the account to link"""
        return self._encode(user_id, LINK_PURPOSE, timedelta(minutes=settings.link_state_expire_minutes))

    def verify_link_state(self, state: str) -> uuid.UUID:
        return self._decode(state, LINK_PURPOSE)
