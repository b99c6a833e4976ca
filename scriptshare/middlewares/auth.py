"""Dependencies resolving the current user from a token"""

import logging

from fastapi import Depends, Header, Request

from scriptshare.errors.token import TokenInvalid, Unauthorized
from scriptshare.schemas.user import UserSchema
from scriptshare.services.token import TokenService

logger = logging.getLogger(__name__)


def get_current_user(
    request: Request,
    x_token: str | None = Header(
        default=None,
        description="User token, browsers may keep it in the session cookie instead",
    ),
    token_service: TokenService = Depends(),
) -> UserSchema | None:
    token = x_token or request.session.get("token")
    if not token:
        return None
    try:
        return token_service.get_user_from_token(token)
    except TokenInvalid as exc:
        logger.info("Ignoring invalid token: %s", exc.error)
        return None


def ensure_admin(user: UserSchema | None) -> UserSchema:
    if user is None or not user.admin:
        raise Unauthorized
    return user


def require_admin(user: UserSchema | None = Depends(get_current_user)) -> UserSchema:
    return ensure_admin(user)
