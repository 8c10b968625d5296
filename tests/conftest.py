"""Shared fixtures: settings, fake persistence and a wired test client."""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from backend.src.config import Settings
from backend.src.dependencies import (
    get_agent_repository,
    get_task_repository,
    get_user_repository,
)
from backend.src.main import create_app
from tests.fakes import (
    FakeAgentRepository,
    FakeConnector,
    FakeTaskRepository,
    FakeUserRepository,
)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        mongo_uri="mongodb://127.0.0.1:27017/errand_test",
        log_format="text",
        _env_file=None,
    )


@pytest.fixture
def repos() -> SimpleNamespace:
    return SimpleNamespace(
        agents=FakeAgentRepository(),
        users=FakeUserRepository(),
        tasks=FakeTaskRepository(),
    )


@pytest.fixture
def connector() -> FakeConnector:
    return FakeConnector()


@pytest.fixture
def app(settings, connector, repos):
    app = create_app(settings, connector=connector)
    app.dependency_overrides[get_agent_repository] = lambda: repos.agents
    app.dependency_overrides[get_user_repository] = lambda: repos.users
    app.dependency_overrides[get_task_repository] = lambda: repos.tasks
    return app


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
