from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient

from backend.app import create_app
from backend.config import Settings
from backend.core.storage import MemStorage


@pytest.fixture()
def app() -> Flask:
    return create_app(settings=Settings(_env_file=None), storage=MemStorage())


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
