from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from futureworth.app import create_app
from futureworth.config import TestingConfig


@pytest.fixture()
def app():
    return create_app(config_object=TestingConfig)


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
