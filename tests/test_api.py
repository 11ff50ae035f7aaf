import json

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from wheel_analyzer.api.main import app
from wheel_analyzer.config import settings
from wheel_analyzer.db.base import get_session


@pytest.fixture
def client(engine):
    def override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_home(client):
    assert client.get("/").json()["ok"] is True


def test_add_and_list_spins(client):
    for o in (2, 10, 10):
        r = client.post("/spins", json={"outcome": o})
        assert r.status_code == 200
        assert r.json()["outcome"] == o
    body = client.get("/spins").json()
    assert body["total"] == 3
    assert [e["outcome"] for e in body["items"]] == [2, 10, 10]


def test_invalid_outcome(client):
    assert client.post("/spins", json={"outcome": 7}).status_code == 400
    assert client.post("/spins", json={"outcome": "x"}).status_code == 422


def test_undo_and_clear(client):
    assert client.delete("/spins/last").status_code == 404
    client.post("/spins", json={"outcome": 3})
    client.post("/spins", json={"outcome": 5})
    assert client.delete("/spins/last").json()["outcome"] == 5
    assert client.delete("/spins").json() == {"removed": 1}


def test_analysis(client):
    for o in (2, 3, 2, 3, 2, 3, 2, 3):
        client.post("/spins", json={"outcome": o})
    body = client.get("/analysis").json()
    assert body["total_spins"] == 8
    assert len(body["recommendations"]) == 2
    assert body["outcome_statistics"][0]["percentage"] == pytest.approx(50)

    narrow = client.get("/analysis", params={"recent_spins_window": 4}).json()
    assert narrow["total_spins"] == 8
    assert client.get("/analysis", params={"recent_spins_window": 0}).status_code == 400


def test_export_import(client):
    client.post("/spins", json={"outcome": 5})
    exported = client.get("/export").text
    assert json.loads(exported)["history"][0]["outcome"] == 5

    client.delete("/spins")
    r = client.post("/import", content=exported, headers={"Content-Type": "application/json"})
    assert r.json() == {"imported": 1}
    assert client.post("/import", content="nope").status_code == 400


def test_api_key(client, monkeypatch):
    monkeypatch.setattr(settings, "api_key", "secret")
    assert client.post("/spins", json={"outcome": 2}).status_code == 401
    r = client.post("/spins", json={"outcome": 2}, headers={"X-API-Key": "secret"})
    assert r.status_code == 200
    # reads stay open
    assert client.get("/analysis").status_code == 200


def test_import_with_nan_timestamp(client):
    r = client.post("/import", content='{"history": [{"outcome": 5, "timestamp": NaN}]}',
                    headers={"Content-Type": "application/json"})
    assert r.status_code == 200
    assert r.json() == {"imported": 1}
