import json
import math

import pytest

from wheel_analyzer import services
from wheel_analyzer.core.models import Event


def test_record_and_load_in_order(session):
    for o in (2, 5, 10, 5):
        services.record_spin(session, o)
    history = services.load_history(session)
    assert [e.outcome for e in history] == [2, 5, 10, 5]
    assert len({e.id for e in history}) == 4


@pytest.mark.parametrize("bad", [0, 4, True, "5"])
def test_record_rejects_unknown_outcomes(session, bad):
    with pytest.raises(ValueError):
        services.record_spin(session, bad)
    assert services.load_history(session) == []


def test_undo_and_clear(session):
    assert services.undo_last(session) is None
    for o in (2, 3, 5):
        services.record_spin(session, o)
    removed = services.undo_last(session)
    assert removed.outcome == 5
    assert [e.outcome for e in services.load_history(session)] == [2, 3]
    assert services.clear_history(session) == 2
    assert services.load_history(session) == []


def test_save_history_replaces_store(session, make_history):
    services.record_spin(session, 2)
    history = services.load_history(session)
    history.append(Event(id="manual", outcome=10, timestamp=1.0))
    assert services.save_history(session, history) == 2
    assert [e.outcome for e in services.load_history(session)] == [2, 10]


def test_export_then_import(session, engine):
    for o in (3, 3, 10):
        services.record_spin(session, o)
    payload = services.export_history(session)
    data = json.loads(payload)
    assert set(data) == {"history", "timestamp"}
    assert [e["outcome"] for e in data["history"]] == [3, 3, 10]

    services.clear_history(session)
    assert services.import_history(session, payload)
    assert [e.outcome for e in services.load_history(session)] == [3, 3, 10]


def test_import_filters_and_fills_entries(session):
    payload = json.dumps({"history": [
        {"id": "a", "outcome": 2, "timestamp": 10},
        {"outcome": 7, "timestamp": 11},
        {"outcome": 5},
        {"id": "a", "outcome": 3, "timestamp": 12},
        "junk",
    ]})
    assert services.import_history(session, payload)
    history = services.load_history(session)
    assert [e.outcome for e in history] == [2, 5, 3]
    assert history[0].id == "a" and history[0].timestamp == 10
    assert history[1].id and history[2].id != "a"


@pytest.mark.parametrize("payload", ["not json", "[]", '{"history": 5}', '{"items": []}'])
def test_import_rejects_malformed_payloads(session, payload):
    services.record_spin(session, 2)
    assert not services.import_history(session, payload)
    assert len(services.load_history(session)) == 1


def test_get_analysis_uses_stored_history(session):
    for o in (5, 5, 2):
        services.record_spin(session, o)
    result = services.get_analysis(session)
    assert result.total_spins == 3
    assert result.outcome_statistics[2].count == 2


@pytest.mark.parametrize("ts", ["NaN", "Infinity", "-Infinity"])
def test_import_replaces_non_finite_timestamps(session, ts):
    payload = '{"history": [{"outcome": 2, "timestamp": %s}, {"id": "b", "outcome": 3, "timestamp": %s}]}' % (ts, ts)
    assert services.import_history(session, payload)
    history = services.load_history(session)
    assert [e.outcome for e in history] == [2, 3]
    assert all(math.isfinite(e.timestamp) for e in history)
    assert history[1].id == "b"
