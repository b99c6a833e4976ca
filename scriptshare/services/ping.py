"""Notification dispatcher. Tells search engines the sitemap has changed."""

import logging

from fastapi import BackgroundTasks, Depends
from sqlalchemy.orm import Session

from scriptshare.config import Config, get_config
from scriptshare.tasks.sitemap_ping import ping_search_engine
from scriptshare.uow import get_uow

logger = logging.getLogger(__name__)


class PingService:
    def __init__(
        self,
        background_tasks: BackgroundTasks,
        db: Session = Depends(get_uow),
        config: Config = Depends(get_config),
    ):
        self.background_tasks = background_tasks
        self.db = db
        self.config = config

    def schedule_pings(self) -> None:
        """Queue one ping per engine, sent only if the current transaction commits.

        The pings run after the response is sent, so a slow search engine
        does not hold up a script submission.
        """
        if self.config.debug:
            logger.debug("Debug mode, sitemap pings suppressed")
            return
        for engine in self.config.ping_urls:
            self.db.after_commit(self._enqueue, engine)

    def _enqueue(self, engine: str) -> None:
        logger.debug("Queueing sitemap ping for %s", engine)
        self.background_tasks.add_task(ping_search_engine, engine, self.config)
