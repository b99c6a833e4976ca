"""Tests for the submission workflow of ScriptService"""

import logging
from dataclasses import replace
from unittest.mock import Mock

import pytest
from fastapi import BackgroundTasks
from sqlalchemy.exc import OperationalError

from scriptshare.errors.captcha import CaptchaValidationError
from scriptshare.errors.script import PermalinkExhausted, UniquenessViolation
from scriptshare.models.comment import Comment
from scriptshare.models.script import Script
from scriptshare.models.tag import Tag
from scriptshare.schemas.script import ScriptFormSchema
from scriptshare.services.permalink import PermalinkGenerator
from scriptshare.services.ping import PingService
from scriptshare.services.script import ScriptService
from scriptshare.services.tag import TagService
from scriptshare.tasks.sitemap_ping import ping_search_engine
from scriptshare.uow import UnitOfWork


def make_form(**fields) -> ScriptFormSchema:
    data = dict(
        author="tom",
        source="print('hi')",
        title="Service Test",
        tags="alpha beta",
        captcha_response="proof",
    )
    data.update(fields)
    return ScriptFormSchema(**data)


class TestSubmissionWorkflow:
    """Production mode: captcha is checked and sitemap pings are queued"""

    @pytest.fixture
    def build(self, db_conn, test_config):
        uows = []

        def f(
            debug: bool = False,
            background_tasks=None,
            permalink_generator=None,
            **config_overrides,
        ):
            config = replace(test_config, debug=debug, **config_overrides)
            uow = UnitOfWork(db_conn.get_session())
            uows.append(uow)
            background_tasks = background_tasks or BackgroundTasks()
            captcha_service = Mock()
            service = ScriptService(
                db=uow,
                tag_service=TagService(db=uow),
                captcha_service=captcha_service,
                ping_service=PingService(
                    background_tasks=background_tasks, db=uow, config=config
                ),
                permalink_generator=permalink_generator or PermalinkGenerator(),
                config=config,
            )
            return service, captcha_service, background_tasks

        yield f
        for uow in uows:
            uow.db.close()

    def test_captcha_checked_with_client_address(self, build):
        service, captcha_service, _ = build()
        service.submit(make_form(title="Captcha Checked"), remote_ip="10.0.0.1")
        captcha_service.validate.assert_called_once_with("proof", "10.0.0.1")

    def test_pings_queued_after_commit(self, build):
        service, _, background_tasks = build()
        script = service.submit(make_form(title="Pinged"))
        assert script.permalink == "pinged"
        queued = [(task.func, task.args[0]) for task in background_tasks.tasks]
        assert queued == [
            (ping_search_engine, "google"),
            (ping_search_engine, "bing"),
        ]

    def test_tags_counted_after_commit(self, build, count_rows):
        service, _, _ = build()
        before = count_rows(Tag, name="alpha")
        service.submit(make_form(title="Counted", tags="alpha"))
        assert before == 0
        assert count_rows(Tag, name="alpha") == 1

    def test_debug_mode_skips_captcha_and_pings(self, build):
        service, captcha_service, background_tasks = build(debug=True)
        service.submit(make_form(title="Debugging", captcha_response=None))
        captcha_service.validate.assert_not_called()
        assert background_tasks.tasks == []

    def test_rejected_captcha_stores_nothing(self, build, count_rows):
        service, captcha_service, background_tasks = build()
        captcha_service.validate.side_effect = CaptchaValidationError("bad proof")
        with pytest.raises(CaptchaValidationError):
            service.submit(make_form(title="Robot", tags="robots"))
        assert count_rows(Script, title="Robot") == 0
        assert count_rows(Tag, name="robots") == 0
        assert background_tasks.tasks == []

    def test_failed_insert_rolls_back_and_drops_pings(
        self, build, count_rows, monkeypatch
    ):
        service, _, background_tasks = build()
        service.submit(make_form(title="Taken"))

        service, _, background_tasks = build()
        # pretend the permalink looked free, the insert then hits the primary key
        monkeypatch.setattr(ScriptService, "_permalink_taken", lambda self, p: False)
        with pytest.raises(UniquenessViolation):
            service.submit(make_form(title="Taken", source="other", tags="lost"))
        assert background_tasks.tasks == []
        assert count_rows(Script, permalink="taken") == 1
        assert count_rows(Tag, name="lost") == 0

    def test_permalink_retry_is_bounded(self, build, count_rows):
        service, _, _ = build()
        service.submit(make_form(title="Crowded"))

        stuck = Mock(spec=PermalinkGenerator)
        stuck.generate.return_value = "crowded"
        stuck.regenerate.return_value = "crowded"
        service, _, background_tasks = build(
            permalink_generator=stuck, permalink_max_attempts=3
        )
        with pytest.raises(PermalinkExhausted):
            service.submit(make_form(title="Crowded", source="again"))
        assert stuck.regenerate.call_count == 3
        assert background_tasks.tasks == []
        assert count_rows(Script, title="Crowded") == 1

    def test_enqueue_failure_does_not_fail_submission(self, build, count_rows):
        broken_queue = Mock()
        broken_queue.add_task.side_effect = RuntimeError("queue is down")
        service, _, _ = build(background_tasks=broken_queue)
        script = service.submit(make_form(title="Queue Down", tags="resilient"))
        assert broken_queue.add_task.call_count == 2
        assert count_rows(Script, permalink=script.permalink) == 1
        assert count_rows(Tag, name="resilient") == 1

    def test_single_attempt_still_checks_regenerated_permalink(self, build, count_rows):
        service, _, _ = build()
        service.submit(make_form(title="Once"))

        service, _, _ = build(permalink_max_attempts=1)
        script = service.submit(make_form(title="Once", source="twice"))
        assert script.permalink.startswith("once_")
        assert count_rows(Script, title="Once") == 2

    def test_failed_tag_update_drops_pings_with_log(
        self, build, count_rows, monkeypatch, caplog
    ):
        service, _, background_tasks = build()

        def broken_increment_all(names):
            raise OperationalError("UPDATE tags", {}, Exception("database is locked"))

        monkeypatch.setattr(service._tag_service, "increment_all", broken_increment_all)
        with caplog.at_level(logging.WARNING, logger="scriptshare"):
            with pytest.raises(OperationalError):
                service.submit(make_form(title="Uncounted", tags="uncounted"))
        assert background_tasks.tasks == []
        assert count_rows(Script, permalink="uncounted") == 1
        assert count_rows(Tag, name="uncounted") == 0
        assert "Script uncounted stored but tag counters not updated" in caplog.text


class TestDeletionWorkflow:
    @pytest.fixture
    def service(self, db_conn, test_config):
        uow = UnitOfWork(db_conn.get_session())
        yield ScriptService(
            db=uow,
            tag_service=TagService(db=uow),
            captcha_service=Mock(),
            ping_service=PingService(
                background_tasks=BackgroundTasks(), db=uow, config=test_config
            ),
            permalink_generator=PermalinkGenerator(),
            config=test_config,
        )
        uow.db.close()

    def test_failed_commit_keeps_script_and_comments(
        self, service, count_rows, monkeypatch
    ):
        script = service.submit(make_form(title="Survivor"))
        for body in ("first!", "second!"):
            service.db.add(
                Comment(script_permalink=script.permalink, author="bob", body=body)
            )
        service.db.commit()

        session = service.db.db

        def failing_commit():
            # the delete reaches the database before the commit fails
            session.flush()
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(session, "commit", failing_commit)
        with pytest.raises(OperationalError):
            service.delete(script.permalink)
        monkeypatch.undo()

        assert count_rows(Script, permalink="survivor") == 1
        assert count_rows(Comment, script_permalink="survivor") == 2
        # the session was rolled back and keeps working
        assert service.get("survivor").title == "Survivor"
        assert service.delete("survivor") == "survivor"
        assert count_rows(Comment, script_permalink="survivor") == 0
