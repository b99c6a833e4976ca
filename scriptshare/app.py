"""FastAPI app initialization, exception handling"""

import logging
import traceback

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.sessions import SessionMiddleware

from scriptshare.config import Config, get_config
from scriptshare.errors.base import ApplicationError
from scriptshare.errors.common import UnexpectedError
from scriptshare.routes.auth import auth_router
from scriptshare.routes.script import script_router, scripts_router
from scriptshare.routes.sitemap import sitemap_router
from scriptshare.routes.tag import tag_router
from scriptshare.routes.tasks import tasks_router

logger = logging.getLogger(__name__)

config: Config = get_config()
if not config.secret_key:
    raise ValueError(
        "SECRET_KEY is missing in the configuration. Please set a valid secret key."
    )

app = FastAPI(title=config.app_name, version=config.app_version)
app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    SessionMiddleware,
    secret_key=config.secret_key,
)


def _error_response(
    exc: ApplicationError, cause: BaseException | None = None
) -> JSONResponse:
    c = {
        "error_code": exc.error_code,
        "error": exc.error,
        "where": exc.where,
    }
    status_code = exc.http_code or 500
    if status_code >= 500:
        logger.error(c)
        # Only print full traceback when in debug logging
        if logger.isEnabledFor(logging.DEBUG):
            traceback.print_exception(cause or exc)
    else:
        logger.warning(c)
    return JSONResponse(status_code=status_code, content=c)


@app.exception_handler(ApplicationError)
def application_exception_handler(request: Request, exc: ApplicationError):
    return _error_response(exc)


@app.exception_handler(SQLAlchemyError)
def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    return _error_response(UnexpectedError(exc._message()), cause=exc)


@app.exception_handler(Exception)
def unexpected_exception_handler(request: Request, exc: Exception):
    return _error_response(UnexpectedError(str(exc)), cause=exc)


app.include_router(script_router)
app.include_router(scripts_router)
app.include_router(tag_router)
app.include_router(auth_router)
app.include_router(tasks_router)
app.include_router(sitemap_router)

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
