"""Database connection and initialization"""

import json
import logging
import os
from typing import Any, Generator

from fastapi import Depends
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from scriptshare.config import Config, get_config
from scriptshare.models.base import BaseModel

# import models so they are registered in the metadata
from scriptshare.models import comment, script, tag  # noqa: F401

logger = logging.getLogger(__name__)


def _json_serializer(value: Any) -> str:
    # store tags as typed so they can be matched in their text form
    return json.dumps(value, ensure_ascii=False)


def _enable_sqlite_foreign_keys_and_savepoints(engine: Engine) -> None:
    """pysqlite ignores foreign keys and mangles SAVEPOINT handling by default."""

    @event.listens_for(engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        # disable pysqlite's own BEGIN, SQLAlchemy emits it below
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")


class DatabaseConnection:
    engine: Engine
    session_local: sessionmaker[Session]
    # one engine per database url, tables are created once per process
    _engines: dict[str, Engine] = {}

    def __init__(self, config: Config = Depends(get_config)) -> None:
        self.database_url = config.database_url
        engine = self.__class__._engines.get(self.database_url)
        if engine is None:
            engine = self._create_engine(config)
            self.__class__._engines[self.database_url] = engine
            self.engine = engine
            self.create_tables()
        self.engine = engine
        self.session_local = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )

    @staticmethod
    def _create_engine(config: Config) -> Engine:
        if config.database_url.startswith("sqlite"):
            # Ensure the database folder exists.
            os.makedirs(config.database_path.parent, exist_ok=True)
            engine = create_engine(
                config.database_url,
                connect_args={"check_same_thread": False},
                json_serializer=_json_serializer,
            )
            _enable_sqlite_foreign_keys_and_savepoints(engine)
            return engine
        return create_engine(config.database_url, json_serializer=_json_serializer)

    def create_tables(self) -> None:
        """Create all database tables defined in models."""
        logger.info("Creating database tables...")
        BaseModel.metadata.create_all(bind=self.engine)
        logger.info("Database tables created.")

    def drop_tables(self) -> None:
        """Drop all database tables and forget the engine."""
        logger.info("Dropping database tables...")
        BaseModel.metadata.drop_all(bind=self.engine)
        self.engine.dispose()
        self.__class__._engines.pop(self.database_url, None)
        logger.info("Database tables dropped.")

    def get_session(self) -> Session:
        """Return a new SQLAlchemy session."""
        return self.session_local()


def get_db(db_conn: DatabaseConnection = Depends()) -> Generator[Session, Any, None]:
    """
    Dependency for providing a SQLAlchemy session to services and tests.

    Yields:
        SQLAlchemy Session.
    """
    session = db_conn.get_session()
    try:
        yield session
    finally:
        session.close()
