import json
import logging
import time
from typing import Iterable, Optional

from sqlmodel import Session

from wheel_analyzer.analytics.engine import analyze
from wheel_analyzer.core.alphabet import OUTCOMES
from wheel_analyzer.core.models import AnalysisConfig, AnalysisResult, Event, new_event
from wheel_analyzer.core.validation import is_valid_outcome, is_valid_timestamp
from wheel_analyzer.db.crud import delete_all, delete_last, insert_event, list_events, replace_all

log = logging.getLogger(__name__)


def record_spin(session: Session, outcome: int) -> Event:
    if not is_valid_outcome(outcome):
        raise ValueError(f"outcome must be one of {list(OUTCOMES)}")
    e = insert_event(session, new_event(outcome))
    log.info("recorded spin %s (%s)", e.outcome, e.id)
    return e


def undo_last(session: Session) -> Optional[Event]:
    e = delete_last(session)
    if e:
        log.info("removed last spin %s (%s)", e.outcome, e.id)
    return e


def clear_history(session: Session) -> int:
    n = delete_all(session)
    log.info("cleared %d spins", n)
    return n


def load_history(session: Session) -> list[Event]:
    return list_events(session)


def save_history(session: Session, events: Iterable[Event]) -> int:
    """Replace the stored history with ``events``. Callers save explicitly after mutating their copy."""
    n = replace_all(session, events)
    log.info("saved %d spins", n)
    return n


def get_analysis(session: Session, config: AnalysisConfig | None = None) -> AnalysisResult:
    return analyze(list_events(session), config)


def _now_ms() -> int:
    return int(time.time() * 1000)


def dump_history(events: Iterable[Event]) -> str:
    data = {"history": [e.model_dump() for e in events], "timestamp": _now_ms()}
    return json.dumps(data, indent=2)


def normalize_entries(raw: list) -> list[Event]:
    """Drop entries with an unknown outcome; fill in missing ids and timestamps."""
    out: list[Event] = []
    seen: set[str] = set()
    for entry in raw:
        if not isinstance(entry, dict) or not is_valid_outcome(entry.get("outcome")):
            continue
        ts = entry.get("timestamp")
        ts = float(ts) if is_valid_timestamp(ts) else time.time()
        eid = entry.get("id")
        if not isinstance(eid, str) or not eid or eid in seen:
            eid = new_event(entry["outcome"], ts).id
        seen.add(eid)
        out.append(Event(id=eid, outcome=entry["outcome"], timestamp=ts))
    if len(out) != len(raw):
        log.warning("dropped %d invalid history entries", len(raw) - len(out))
    return out


def parse_history(payload: str) -> Optional[list[Event]]:
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as exc:
        log.error("history import failed: %s", exc)
        return None
    if not isinstance(data, dict) or not isinstance(data.get("history"), list):
        log.error("history import failed: no history list")
        return None
    return normalize_entries(data["history"])


def export_history(session: Session) -> str:
    return dump_history(list_events(session))


def import_history(session: Session, payload: str) -> bool:
    events = parse_history(payload)
    if events is None:
        return False
    save_history(session, events)
    return True
