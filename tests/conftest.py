"""
Shared fixtures: every store-level test runs against both backends
"""

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.services.rsvp_service import RsvpService
from app.services.sheet_store import SheetRsvpStore
from app.services.sql_store import SqlRsvpStore

BACKENDS = ["sql", "sheet"]

def backend_settings(backend: str, tmp_path) -> Settings:
    return Settings(
        STORE_BACKEND=backend,
        DATABASE_URL=f"sqlite:///{tmp_path / 'rsvps.db'}",
        SHEET_PATH=str(tmp_path / "rsvps.xlsx"),
    )

@pytest.fixture(params=BACKENDS)
def store(request, tmp_path):
    """An empty store of each kind"""
    if request.param == "sql":
        store = SqlRsvpStore(f"sqlite:///{tmp_path / 'rsvps.db'}")
    else:
        store = SheetRsvpStore(str(tmp_path / "rsvps.xlsx"))
    try:
        yield store
    finally:
        store.close()

@pytest.fixture
def service(store):
    return RsvpService(store)

@pytest.fixture(params=BACKENDS)
def client(request, tmp_path):
    """Test client for an app started on each backend"""
    from main import create_app

    app = create_app(backend_settings(request.param, tmp_path))
    with TestClient(app) as client:
        yield client
