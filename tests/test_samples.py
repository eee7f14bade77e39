import sqlite3

import pytest


def test_root_returns_greeting(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"data": "Hello, World!"}


def test_create_returns_record_with_generated_id(client):
    response = client.post(
        "/samples",
        json={"name": "s1", "timestamp": "2021-01-01T00:00:00Z"},
    )
    assert response.status_code == 200
    sample = response.json()["data"]
    assert isinstance(sample["id"], int)
    assert sample["name"] == "s1"
    assert sample["timestamp"] == "2021-01-01T00:00:00Z"


def test_unknown_fields_are_ignored(client):
    response = client.post(
        "/samples",
        json={"name": "s1", "timestamp": "2021-01-01T00:00:00Z", "unit": "kPa"},
    )
    assert response.status_code == 200
    sample = response.json()["data"]
    assert "unit" not in sample
    assert set(sample) == {"id", "name", "timestamp", "v0", "v1"}


@pytest.mark.parametrize(
    "timestamp",
    ["2021-01-01T00:00:00+02:00", "2021-01-01T00:00:00-05:30", "2021-01-01T00:00:00"],
)
def test_timestamp_offset_is_preserved(client, create_sample, timestamp):
    created = create_sample(timestamp=timestamp)
    assert created["timestamp"] == timestamp

    fetched = client.get(f"/samples/{created['id']}").json()["data"]
    assert fetched["timestamp"] == timestamp


def test_missing_readings_are_null_not_zero(client, create_sample):
    created = create_sample(name="s1", timestamp="2021-01-01T00:00:00Z")

    fetched = client.get(f"/samples/{created['id']}").json()["data"]
    assert fetched["v0"] is None
    assert fetched["v1"] is None


def test_readings_round_trip_exactly(client, create_sample):
    created = create_sample(v0=1.5, v1=-2.25)

    fetched = client.get(f"/samples/{created['id']}").json()["data"]
    assert fetched["v0"] == 1.5
    assert fetched["v1"] == -2.25


def test_zero_reading_is_distinct_from_missing(client, create_sample):
    created = create_sample(v0=0, v1=None)

    fetched = client.get(f"/samples/{created['id']}").json()["data"]
    assert fetched["v0"] == 0.0
    assert fetched["v1"] is None


def test_missing_name_is_rejected_and_nothing_stored(client, create_sample):
    create_sample()
    before = len(client.get("/samples").json()["data"])

    response = client.post("/samples", json={"timestamp": "2021-01-01T00:00:00Z"})

    assert response.status_code == 400
    assert "name" in response.json()["error"]
    assert len(client.get("/samples").json()["data"]) == before


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "", "timestamp": "2021-01-01T00:00:00Z"},
        {"name": "s1"},
        {"name": "s1", "timestamp": "yesterday"},
        {"name": "s1", "timestamp": "2021-01-01T00:00:00Z", "v0": "1.5"},
        {"name": "s1", "timestamp": "2021-01-01T00:00:00Z", "v1": True},
    ],
)
def test_invalid_payloads_are_rejected(client, payload):
    response = client.post("/samples", json=payload)
    assert response.status_code == 400
    assert response.json()["error"]
    assert client.get("/samples").json() == {"data": []}


def test_malformed_json_is_rejected(client):
    response = client.post(
        "/samples",
        content=b'{"name": "s1", "timestamp": ',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_unknown_id_is_not_found(client):
    response = client.get("/samples/999")
    assert response.status_code == 404
    assert response.json() == {"error": "Record not found!"}


def test_non_integer_id_is_a_validation_error(client):
    response = client.get("/samples/abc")
    assert response.status_code == 400
    assert "sample_id" in response.json()["error"]


def test_list_returns_every_created_sample(client):
    submitted = [
        {"name": "a", "timestamp": "2021-01-01T00:00:00Z", "v0": 1.0},
        {"name": "b", "timestamp": "2021-01-02T00:00:00Z", "v1": 2.5},
        {"name": "a", "timestamp": "2021-01-01T00:00:00Z"},
    ]
    for payload in submitted:
        assert client.post("/samples", json=payload).status_code == 200

    samples = client.get("/samples").json()["data"]

    assert len(samples) == len(submitted)
    for sample, payload in zip(samples, submitted):
        assert sample["name"] == payload["name"]
        assert sample["timestamp"] == payload["timestamp"]
        assert sample["v0"] == payload.get("v0")
        assert sample["v1"] == payload.get("v1")
    assert len({sample["id"] for sample in samples}) == len(submitted)


def test_list_is_empty_on_fresh_store(client):
    assert client.get("/samples").json() == {"data": []}


def test_repeated_get_is_byte_identical(client, create_sample):
    created = create_sample(v0=3.25)

    first = client.get(f"/samples/{created['id']}")
    second = client.get(f"/samples/{created['id']}")

    assert first.content == second.content


def test_versioned_prefix_serves_same_data(client, create_sample):
    created = create_sample(name="versioned")

    assert client.get(f"/api/v1/samples/{created['id']}").json() == client.get(
        f"/samples/{created['id']}"
    ).json()
    assert len(client.get("/api/v1/samples").json()["data"]) == 1


def test_openapi_document_lists_sample_routes(client):
    schema = client.get("/openapi.json").json()
    assert schema["info"]["title"] == "Sample Store API"
    assert "/samples" in schema["paths"]
    assert "/samples/{sample_id}" in schema["paths"]


def test_database_failure_returns_server_error(app, client, monkeypatch):
    def broken_connection():
        raise sqlite3.OperationalError("unable to open database file")

    monkeypatch.setattr(app.state.db, "get_connection", broken_connection)

    response = client.get("/samples")

    assert response.status_code == 500
    assert response.json() == {"error": "Database error"}


@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_readings_are_rejected(client, literal):
    body = '{"name": "s1", "timestamp": "2021-01-01T00:00:00Z", "v0": %s, "v1": 1.0}' % literal
    response = client.post(
        "/samples",
        content=body.encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert "v0" in response.json()["error"]
    assert client.get("/samples").json() == {"data": []}


@pytest.mark.parametrize("sample_id", ["99999999999999999999", "-99999999999999999999"])
def test_id_outside_integer_range_is_not_found(client, create_sample, sample_id):
    create_sample()

    response = client.get(f"/samples/{sample_id}")

    assert response.status_code == 404
    assert response.json() == {"error": "Record not found!"}
