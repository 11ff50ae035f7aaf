from typing import Iterable, Optional
from sqlmodel import Session, select
from wheel_analyzer.core.models import Event
from wheel_analyzer.db.models import SpinRow


def insert_event(session: Session, e: Event) -> Event:
    row = SpinRow.from_event(e)
    session.add(row)
    session.commit()
    session.refresh(row)
    return row.to_event()


def list_events(session: Session) -> list[Event]:
    """Stored history, oldest first."""
    rows = session.exec(select(SpinRow).order_by(SpinRow.position)).all()
    return [r.to_event() for r in rows]


def delete_last(session: Session) -> Optional[Event]:
    row = session.exec(select(SpinRow).order_by(SpinRow.position.desc()).limit(1)).first()
    if not row:
        return None
    e = row.to_event()
    session.delete(row)
    session.commit()
    return e


def _delete_rows(session: Session) -> int:
    rows = session.exec(select(SpinRow)).all()
    for row in rows:
        session.delete(row)
    return len(rows)


def delete_all(session: Session) -> int:
    n = _delete_rows(session)
    session.commit()
    return n


def replace_all(session: Session, events: Iterable[Event]) -> int:
    _delete_rows(session)
    # flush deletes first so re-imported ids do not clash on the unique index
    session.flush()
    n = 0
    for e in events:
        session.add(SpinRow.from_event(e))
        n += 1
    session.commit()
    return n
