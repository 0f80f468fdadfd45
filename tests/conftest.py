"""Shared fixtures: one application per test on a temporary SQLite file."""

import pytest
from fastapi.testclient import TestClient

from restaurant_directory_api.app.core.config import Settings
from restaurant_directory_api.app.core.db import init_db
from restaurant_directory_api.app.main import create_app
from restaurant_directory_api.app.services.restaurant_service import RestaurantService


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=str(tmp_path / "restaurants.db"))


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def cached_client(tmp_path):
    settings = Settings(database_url=str(tmp_path / "cached.db"), use_cache=True)
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def service(settings):
    init_db(settings.database_url)
    return RestaurantService(settings.database_url)
