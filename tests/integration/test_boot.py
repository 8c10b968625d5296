"""
Integration tests for process start-up.

Tests cover:
- Missing MONGO_URI exits with status 1 before the server starts
- A configured process hands the app to uvicorn on port 5000
- A database failure aborts start-up before any request is served
- Both handles are connected and closed by the application lifespan
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from backend.src import main as main_module
from backend.src.config import clear_settings_cache
from backend.src.database import RAW, MongoConnector
from backend.src.errors import DatabaseConnectionError
from backend.src.main import create_app
from tests.fakes import FakeConnector


@pytest.fixture
def clean_environment(monkeypatch, tmp_path):
    monkeypatch.delenv("MONGO_URI", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestMain:

    def test_missing_mongo_uri_exits(self, clean_environment):
        with patch.object(main_module.uvicorn, "run") as run:
            with pytest.raises(SystemExit) as exc_info:
                main_module.main()

        assert exc_info.value.code == 1
        run.assert_not_called()

    def test_configured_process_serves_on_default_port(self, clean_environment, monkeypatch):
        monkeypatch.setenv("MONGO_URI", "mongodb://127.0.0.1:27017/errand")

        with patch.object(main_module.uvicorn, "run") as run:
            main_module.main()

        run.assert_called_once()
        assert run.call_args.kwargs["port"] == 5000
        assert run.call_args.kwargs["host"] == "0.0.0.0"

    def test_port_override(self, clean_environment, monkeypatch):
        monkeypatch.setenv("MONGO_URI", "mongodb://127.0.0.1:27017/errand")
        monkeypatch.setenv("PORT", "8088")

        with patch.object(main_module.uvicorn, "run") as run:
            main_module.main()

        assert run.call_args.kwargs["port"] == 8088


class TestLifespan:

    def test_database_failure_aborts_startup(self, settings):
        connector = FakeConnector(fail_handle=RAW)
        app = create_app(settings, connector=connector)

        with pytest.raises(DatabaseConnectionError):
            with TestClient(app):
                pass

        assert connector.status()[RAW]["error"] == "connection refused"

    def test_handles_opened_and_closed(self, settings):
        connector = FakeConnector()
        app = create_app(settings, connector=connector)

        with TestClient(app) as client:
            assert connector.is_ready
            assert client.get("/ready").status_code == 200

        assert connector.events == ["connect", "close"]
        assert not connector.is_ready

    def test_real_connector_with_patched_driver(self, settings):
        clients = []

        def make_client(*args, **kwargs):
            client = MagicMock()
            client.admin.command = AsyncMock(return_value={"ok": 1})
            client.close = AsyncMock()
            client.get_default_database.return_value.name = "errand_test"
            client.get_default_database.return_value.__getitem__.return_value.create_indexes = AsyncMock()
            clients.append(client)
            return client

        with patch("backend.src.database.AsyncMongoClient", side_effect=make_client):
            app = create_app(settings, connector=MongoConnector(settings))
            with TestClient(app) as client:
                response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"
        assert len(clients) == 2
        for driver_client in clients:
            driver_client.admin.command.assert_awaited_once_with("ping")
            driver_client.close.assert_awaited_once()

    def test_not_ready_before_connect(self, settings):
        connector = MongoConnector(settings)

        assert not connector.is_ready
        assert connector.status()[RAW] == {"ready": False, "error": None}
