"""API routes for sharing, reading and deleting scripts"""

from fastapi import APIRouter, Depends, Form, Request, Response, status
from fastapi.responses import JSONResponse, RedirectResponse

from scriptshare.errors.script import MissingPermalink
from scriptshare.middlewares.auth import ensure_admin, get_current_user, require_admin
from scriptshare.schemas.base import PaginationSchema
from scriptshare.schemas.comment import CommentFormSchema, CommentSchema
from scriptshare.schemas.script import (
    ScriptFiltersSchema,
    ScriptFormSchema,
    ScriptSummarySchema,
    ScriptViewSchema,
)
from scriptshare.schemas.user import UserSchema
from scriptshare.services.comment import CommentService
from scriptshare.services.script import ScriptService

script_router = APIRouter(prefix="/script", tags=["Scripts"])
scripts_router = APIRouter(prefix="/scripts", tags=["Scripts"])


def get_script_form(
    author: str | None = Form(None),
    source: str | None = Form(None),
    title: str | None = Form(None),
    tags: str | None = Form(None, description="whitespace or comma separated"),
    captcha_response: str | None = Form(None, alias="g-recaptcha-response"),
    method: str | None = Form(None, alias="__method"),
) -> ScriptFormSchema:
    return ScriptFormSchema(
        author=author,
        source=source,
        title=title,
        tags=tags,
        captcha_response=captcha_response,
        method=method,
    )


def get_comment_form(
    author: str | None = Form(None),
    body: str | None = Form(None),
    captcha_response: str | None = Form(None, alias="g-recaptcha-response"),
) -> CommentFormSchema:
    return CommentFormSchema(
        author=author, body=body, captcha_response=captcha_response
    )


def _require_permalink(permalink: str | None) -> str:
    if permalink is None or not permalink.strip():
        raise MissingPermalink
    return permalink


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


def _post(
    permalink: str | None,
    request: Request,
    form: ScriptFormSchema,
    user: UserSchema | None,
    script_service: ScriptService,
) -> Response:
    # html forms can not send DELETE
    if (form.method or "").upper() == "DELETE":
        ensure_admin(user)
        return JSONResponse(script_service.delete(_require_permalink(permalink)))

    script = script_service.submit(form, remote_ip=_client_ip(request))
    location = f"{request.scope.get('root_path', '')}/script/{script.permalink}"
    # Send a 201:Created response for Ajax requests.
    if request.headers.get("X-Requested-With") == "XMLHttpRequest":
        return Response(
            status_code=status.HTTP_201_CREATED, headers={"Location": location}
        )
    return RedirectResponse(url=location, status_code=status.HTTP_302_FOUND)


@script_router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
@script_router.post("/", include_in_schema=False)
def submit_script(
    request: Request,
    form: ScriptFormSchema = Depends(get_script_form),
    user: UserSchema | None = Depends(get_current_user),
    script_service: ScriptService = Depends(),
):
    """
    Share a new script.

    Ajax callers (`X-Requested-With: XMLHttpRequest`) get 201 with a Location
    header, browsers are redirected to the new permalink.
    """
    return _post(None, request, form, user, script_service)


@script_router.post("/{permalink}", include_in_schema=False)
def post_to_script(
    permalink: str,
    request: Request,
    form: ScriptFormSchema = Depends(get_script_form),
    user: UserSchema | None = Depends(get_current_user),
    script_service: ScriptService = Depends(),
):
    return _post(permalink, request, form, user, script_service)


@script_router.get("", include_in_schema=False)
@script_router.get("/", include_in_schema=False)
def read_script_without_permalink():
    raise MissingPermalink


@script_router.get("/{permalink}", response_model=ScriptViewSchema)
def read_script(
    permalink: str,
    user: UserSchema | None = Depends(get_current_user),
    script_service: ScriptService = Depends(),
):
    script = script_service.get(_require_permalink(permalink))
    view = ScriptViewSchema.model_validate(script)
    view.admin = user is not None and user.admin
    return view


@script_router.delete("", include_in_schema=False)
@script_router.delete("/", include_in_schema=False)
def delete_script_without_permalink(
    admin: UserSchema = Depends(require_admin),
):
    raise MissingPermalink


@script_router.delete("/{permalink}")
def delete_script(
    permalink: str,
    admin: UserSchema = Depends(require_admin),
    script_service: ScriptService = Depends(),
) -> str:
    return script_service.delete(_require_permalink(permalink))


@script_router.post(
    "/{permalink}/comments",
    response_model=CommentSchema,
    status_code=status.HTTP_201_CREATED,
)
def add_comment(
    permalink: str,
    request: Request,
    form: CommentFormSchema = Depends(get_comment_form),
    comment_service: CommentService = Depends(),
):
    return comment_service.add(
        _require_permalink(permalink), form, remote_ip=_client_ip(request)
    )


@scripts_router.get("", response_model=PaginationSchema[ScriptSummarySchema])
def read_scripts(
    filters: ScriptFiltersSchema = Depends(),
    skip: int = 0,
    limit: int = 100,
    script_service: ScriptService = Depends(),
):
    return script_service.get_all(filters, skip, limit)
