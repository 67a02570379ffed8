"""Shared fixtures for building the app around a fake upstream."""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from main import create_app
from tests.fakes import FakeCompletion, make_settings


@pytest.fixture
def fake_completion() -> FakeCompletion:
    return FakeCompletion()


@pytest.fixture
def client_factory():
    """Build TestClients around a fake upstream with optional setting overrides."""
    clients: list[TestClient] = []

    def _factory(completion: FakeCompletion | None = None, **overrides: Any) -> TestClient:
        app = create_app(make_settings(**overrides), completion=completion or FakeCompletion())
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _factory

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(client_factory, fake_completion) -> TestClient:
    return client_factory(fake_completion)
