from pathlib import Path

from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from wheel_analyzer.config import settings


def make_engine(dsn: str) -> Engine:
    """Engine for ``dsn``. File-backed sqlite gets its parent directory created;
    in-memory sqlite keeps one shared connection so every session sees the same tables."""
    url = make_url(dsn)
    if url.get_backend_name() != "sqlite":
        return create_engine(dsn, echo=False)
    connect_args = {"check_same_thread": False}
    if not url.database or url.database == ":memory:":
        return create_engine(dsn, connect_args=connect_args, poolclass=StaticPool)
    Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(dsn, echo=False, connect_args=connect_args)


engine = make_engine(settings.db_dsn)


def init_db(bind: Engine = engine):
    # spin table must be registered on the metadata first
    from wheel_analyzer.db import models  # noqa: F401
    SQLModel.metadata.create_all(bind)


def get_session():
    with Session(engine) as session:
        yield session
