"""API-level tests for the Flask app."""

import pytest

from app import app


@pytest.fixture(autouse=True)
def env_setup(tmp_path, monkeypatch):
    monkeypatch.setenv("LEDGER_DB_PATH", str(tmp_path / "ledger.db"))
    monkeypatch.setenv("LEDGER_STORAGE_KEY", "test_cards")
    monkeypatch.delenv("LEDGER_ABSORPTION_FACTOR", raising=False)
    monkeypatch.delenv("LEDGER_QUOTA_BYTES", raising=False)
    yield


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def add(client, name="Beer", strength="5", volume="500"):
    return client.post("/api/records", json={"name": name, "strength": strength, "volume": volume})


def test_healthz(client):
    res = client.get("/healthz")
    assert res.status_code == 200
    assert res.get_json() == {"ok": True}


def test_state_empty(client):
    data = client.get("/api/state").get_json()
    assert data["records"] == []
    assert data["total"] == 0.0
    assert data["unit"] == "ml"
    assert data["warning"] is None


def test_add_and_state_newest_first(client):
    first = add(client)
    assert first.status_code == 201
    assert first.get_json()["record"]["pureAlcohol"] == 25.0

    add(client, name="Chuhai", strength="9", volume="350")
    data = client.get("/api/state").get_json()
    assert [r["name"] for r in data["records"]] == ["Chuhai", "Beer"]
    assert data["drink_count"] == 2
    assert data["total"] == 56.5


def test_add_validation_errors(client):
    missing = add(client, name="")
    assert missing.status_code == 400
    assert missing.get_json()["kind"] == "MissingField"

    strength = add(client, strength="101")
    assert strength.status_code == 400
    assert strength.get_json()["kind"] == "StrengthOutOfRange"

    volume = add(client, volume="0")
    assert volume.status_code == 400
    assert volume.get_json()["kind"] == "VolumeInvalid"
    assert "error" in volume.get_json()

    assert client.get("/api/state").get_json()["records"] == []


def test_add_accepts_numeric_json(client):
    res = add(client, strength=12, volume=150)
    assert res.status_code == 201
    assert res.get_json()["record"]["pureAlcohol"] == 18.0


def test_delete_and_not_found(client):
    record_id = add(client).get_json()["record"]["id"]
    ok = client.delete(f"/api/records/{record_id}")
    assert ok.status_code == 200
    assert ok.get_json()["total"] == 0.0

    again = client.delete(f"/api/records/{record_id}")
    assert again.status_code == 404
    assert again.get_json()["kind"] == "NotFound"


def test_quota_exceeded_maps_to_507(client, monkeypatch):
    monkeypatch.setenv("LEDGER_QUOTA_BYTES", "20")
    res = add(client)
    assert res.status_code == 507
    assert res.get_json()["kind"] == "QuotaExceeded"

    monkeypatch.delenv("LEDGER_QUOTA_BYTES")
    assert client.get("/api/state").get_json()["records"] == []


def test_reset_clears_records(client):
    add(client)
    assert client.post("/api/reset").get_json() == {"ok": True}
    assert client.get("/api/state").get_json()["records"] == []


def test_gram_factor_from_env(client, monkeypatch):
    monkeypatch.setenv("LEDGER_ABSORPTION_FACTOR", "0.8")
    data = add(client).get_json()
    assert data["unit"] == "g"
    assert data["record"]["pureAlcohol"] == 20.0


def test_corrupt_slot_reported_as_warning(client):
    from drink_ledger import config

    config.build_ledger().store.backend.set("test_cards", "[{broken")
    data = client.get("/api/state").get_json()
    assert data["records"] == []
    assert data["warning"]["kind"] == "CorruptData"


@pytest.mark.parametrize("body", [["Beer", "5", "500"], "Beer", 5])
def test_add_non_object_body_is_missing_field(client, body):
    res = client.post("/api/records", json=body)
    assert res.status_code == 400
    assert res.get_json()["kind"] == "MissingField"


def test_add_list_name_is_missing_field(client):
    res = client.post("/api/records", json={"name": [], "strength": "5", "volume": "500"})
    assert res.status_code == 400
    assert res.get_json()["kind"] == "MissingField"


def test_overflowing_volume_keeps_existing_records(client):
    add(client)
    res = add(client, name="Keg", strength="100", volume="1e308")
    assert res.status_code == 400
    assert res.get_json()["kind"] == "VolumeInvalid"
    data = client.get("/api/state").get_json()
    assert data["warning"] is None
    assert [r["name"] for r in data["records"]] == ["Beer"]


def test_concurrent_adds_are_all_kept():
    import threading

    app.config["TESTING"] = True
    statuses = []

    def post(i):
        with app.test_client() as c:
            statuses.append(add(c, name=f"Drink {i}").status_code)

    threads = [threading.Thread(target=post, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert statuses == [201] * 8
    with app.test_client() as c:
        assert c.get("/api/state").get_json()["drink_count"] == 8
