import pytest
from sqlmodel import Session

from wheel_analyzer.core.models import Event
from wheel_analyzer.db.base import init_db, make_engine


def build_history(outcomes) -> list[Event]:
    return [Event(id=f"e{i}", outcome=o, timestamp=1_700_000_000 + i) for i, o in enumerate(outcomes)]


@pytest.fixture
def make_history():
    return build_history


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    init_db(engine)
    return engine


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session
