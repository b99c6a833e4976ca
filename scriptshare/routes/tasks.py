"""Task handlers, called by the scheduler or by hand"""

from fastapi import APIRouter, Depends, Form

from scriptshare.config import Config, get_config
from scriptshare.middlewares.auth import require_admin
from scriptshare.schemas.ping import PingReportSchema
from scriptshare.schemas.user import UserSchema
from scriptshare.tasks.sitemap_ping import ping_search_engine

tasks_router = APIRouter(prefix="/tasks", tags=["Tasks"])


@tasks_router.post("/ping", response_model=PingReportSchema)
def ping(
    engine: str = Form(),
    config: Config = Depends(get_config),
    admin: UserSchema = Depends(require_admin),
):
    return PingReportSchema(
        engine=engine, delivered=ping_search_engine(engine, config)
    )
