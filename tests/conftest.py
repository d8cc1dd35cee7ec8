"""
Shared fixtures - every test gets its own JSON document and SQLite file
"""
import os

# Keep importing physioflow.main from touching the real data directory
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient

from physioflow.database import DocumentStore
from physioflow.main import create_app


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data.json"


@pytest.fixture
def store(data_file):
    return DocumentStore(str(data_file))


@pytest.fixture
def app(tmp_path, data_file):
    return create_app(
        data_file=str(data_file),
        database_url=f"sqlite:///{tmp_path / 'physioflow.db'}",
        enforce_admin_gate=False,
    )


@pytest.fixture
def client(app):
    """Test client"""
    return TestClient(app)
