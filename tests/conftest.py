"""Shared fixtures.

The encryption key must be in the environment before ``config`` is imported,
so it is set here at module level, ahead of any application import.
"""
import os

from cryptography.fernet import Fernet

os.environ.setdefault('DATA_ENCRYPTION_KEYS', Fernet.generate_key().decode())

import pytest
from fastapi.testclient import TestClient

from db.session import get_store
from db.store import UserStore
from main import app


@pytest.fixture
def store(tmp_path):
    store = UserStore.from_url(f'sqlite:///{tmp_path / "test.db"}')
    store.init_schema()
    yield store
    store.close()


@pytest.fixture
def bare_store(tmp_path):
    """A store whose tables were never created."""
    store = UserStore.from_url(f'sqlite:///{tmp_path / "bare.db"}')
    yield store
    store.close()


@pytest.fixture
def client(store):
    # Not used as a context manager, so the lifespan (and its default
    # database) never runs.
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
