"""Token service. Issues and verifies signed user tokens."""

import logging
import time
from datetime import timedelta

import jwt
from fastapi import Depends

from scriptshare.config import Config, get_config
from scriptshare.errors.token import TokenInvalid
from scriptshare.schemas.user import UserSchema

logger = logging.getLogger(__name__)


class TokenService:
    ALGORITHM = "HS256"

    def __init__(self, config: Config = Depends(get_config)):
        self.config = config

    def _generate_new_token(self, email: str, ttl: timedelta = timedelta(weeks=4)) -> str:
        """Generate a new signed token with user email and current timestamp."""
        data = {
            "sub": email,
            "iat": int(time.time()),
            "exp": int(time.time() + ttl.total_seconds()),
        }
        return jwt.encode(data, self.config.secret_key, algorithm=self.ALGORITHM)

    def get_user_from_token(self, token: str) -> UserSchema:
        try:
            payload = jwt.decode(
                token, self.config.secret_key or "", algorithms=[self.ALGORITHM]
            )
        except jwt.PyJWTError as exc:
            raise TokenInvalid(str(exc)) from exc
        email = payload.get("sub")
        if not email:
            raise TokenInvalid("subject is missing")
        return UserSchema(email=email, admin=email in self.config.admin_users)
