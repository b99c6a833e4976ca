"""Comment service"""

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from scriptshare.config import Config, get_config
from scriptshare.models.comment import Comment
from scriptshare.schemas.comment import CommentFormSchema
from scriptshare.services.base import BaseService
from scriptshare.services.captcha import CaptchaService
from scriptshare.services.script import ScriptService, require_field
from scriptshare.uow import get_uow

logger = logging.getLogger(__name__)


class CommentService(BaseService[Comment]):
    model = Comment

    def __init__(
        self,
        db: Session = Depends(get_uow),
        script_service: ScriptService = Depends(),
        captcha_service: CaptchaService = Depends(),
        config: Config = Depends(get_config),
    ):
        self.db = db
        self._script_service = script_service
        self._captcha_service = captcha_service
        self.config = config

    def add(
        self, permalink: str, form: CommentFormSchema, remote_ip: str | None = None
    ) -> Comment:
        if not self.config.debug:
            self._captcha_service.validate(form.captcha_response, remote_ip)
        author = require_field(form, "author")
        body = require_field(form, "body")
        script = self._script_service.get(permalink)
        comment = self.create(
            Comment(script_permalink=script.permalink, author=author, body=body)
        )
        self.db.commit()
        logger.debug("Comment %s added to %s", comment.id, permalink)
        return comment
