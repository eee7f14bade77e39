import pytest
from fastapi.testclient import TestClient

from sample_store_api.app.core.config import Settings
from sample_store_api.app.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=str(tmp_path / "samples.db"))


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Entering the context runs the lifespan, which applies migrations.
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def create_sample(client):
    def _create(**payload):
        payload.setdefault("name", "s1")
        payload.setdefault("timestamp", "2021-01-01T00:00:00Z")
        response = client.post("/samples", json=payload)
        assert response.status_code == 200, response.text
        return response.json()["data"]

    return _create
