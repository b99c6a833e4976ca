"""Script service. Submission, lookup and removal of shared scripts."""

import json
import logging

from fastapi import Depends
from sqlalchemy import Text, cast
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from scriptshare.config import Config, get_config
from scriptshare.errors.common import ValidationError
from scriptshare.errors.script import PermalinkExhausted, UniquenessViolation
from scriptshare.models.script import Script
from scriptshare.schemas.script import ScriptFiltersSchema, ScriptFormSchema
from scriptshare.services.base import BaseService
from scriptshare.services.captcha import CaptchaService
from scriptshare.services.permalink import PermalinkGenerator, get_permalink_generator
from scriptshare.services.ping import PingService
from scriptshare.services.tag import TagService, parse_tags
from scriptshare.uow import get_uow

logger = logging.getLogger(__name__)


def require_field(form, name: str) -> str:
    """Return a required form field, blank values count as missing."""
    value = getattr(form, name, None)
    if value is None or not value.strip():
        raise ValidationError(f"'{name}' is required", where=name)
    return value


class ScriptService(BaseService[Script]):
    model = Script

    def __init__(
        self,
        db: Session = Depends(get_uow),
        tag_service: TagService = Depends(),
        captcha_service: CaptchaService = Depends(),
        ping_service: PingService = Depends(),
        permalink_generator: PermalinkGenerator = Depends(get_permalink_generator),
        config: Config = Depends(get_config),
    ):
        self.db = db
        self._tag_service = tag_service
        self._captcha_service = captcha_service
        self._ping_service = ping_service
        self._permalinks = permalink_generator
        self.config = config

    def _apply_filters(
        self, query: Query[Script], filters: ScriptFiltersSchema
    ) -> Query[Script]:
        if filters.author is not None:
            query = query.filter(self.model.author.ilike(f"%{filters.author}%"))
        if filters.tag is not None:
            # tags are a JSON list, match the encoded name to avoid prefix hits
            encoded = json.dumps(filters.tag, ensure_ascii=False)
            query = query.filter(
                cast(self.model.tags, Text).contains(encoded, autoescape=True)
            )
        return query

    def create(self, obj: Script) -> Script:
        """Insert a new script, the permalink must already be free."""
        self.db.add(obj)
        try:
            self.db.flush()
        except IntegrityError as exc:
            raise UniquenessViolation(f"permalink={obj.permalink}") from exc
        return obj

    def _permalink_taken(self, permalink: str) -> bool:
        return (
            self.db.query(self.model.permalink)
            .filter(self.model.permalink == permalink)
            .first()
            is not None
        )

    def _resolve_permalink(self, script: Script) -> None:
        attempts = 0
        while self._permalink_taken(script.permalink):
            if attempts >= self.config.permalink_max_attempts:
                raise PermalinkExhausted(f"{attempts} attempts for {script.title!r}")
            script.permalink = self._permalinks.regenerate(script.permalink)
            attempts += 1

    def submit(self, form: ScriptFormSchema, remote_ip: str | None = None) -> Script:
        if not self.config.debug:
            self._captcha_service.validate(form.captcha_response, remote_ip)
        author = require_field(form, "author")
        source = require_field(form, "source")
        title = require_field(form, "title")

        script = Script(
            author=author,
            source=source,
            title=title,
            tags=parse_tags(form.tags),
            permalink=self._permalinks.generate(title, source),
        )
        try:
            self._resolve_permalink(script)
            logger.debug("Saving new script with permalink: %s", script.permalink)
            self.create(script)
            self.db.commit()
        except Exception:
            logger.warning("Rolling back tx!")
            self.db.rollback()
            raise

        # counters are updated after the script is committed, a crash here
        # leaves them behind the actual number of scripts. Pings fire on the
        # counter commit.
        try:
            self._tag_service.increment_all(script.tags)
            self._ping_service.schedule_pings()
            self.db.commit()
        except Exception:
            logger.error(
                "Script %s stored but tag counters not updated, pings dropped",
                script.permalink,
            )
            self.db.rollback()
            raise
        return script

    def delete(self, obj_id: str) -> str:
        """Remove a script, its comments go with it (ON DELETE CASCADE)."""
        script = self.get(obj_id)
        try:
            self.db.delete(script)
            self.db.commit()
        except Exception:
            logger.warning("Rolling back tx!")
            self.db.rollback()
            raise
        logger.info("Deleted script %s", obj_id)
        return obj_id
