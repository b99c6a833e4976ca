"""API routes for browser sessions"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from scriptshare.errors.token import Unauthorized
from scriptshare.middlewares.auth import get_current_user
from scriptshare.schemas.user import UserSchema
from scriptshare.services.token import TokenService

auth_router = APIRouter(prefix="/auth", tags=["Auth"])


@auth_router.get("/token/{token}")
def login_with_token(
    token: str,
    request: Request,
    token_service: TokenService = Depends(),
):
    """Keep a valid token in the session cookie, used by login links"""
    token_service.get_user_from_token(token)
    request.session["token"] = token
    return RedirectResponse(url="/scripts", status_code=status.HTTP_302_FOUND)


@auth_router.get("/me", response_model=UserSchema)
def read_me(user: UserSchema | None = Depends(get_current_user)):
    if user is None:
        raise Unauthorized("not logged in")
    return user


@auth_router.post("/logout")
def logout(request: Request) -> bool:
    return request.session.pop("token", None) is not None
