"""
Tests for the relational backend's error mapping
"""

import pytest

from app.core.errors import StorageError
from app.services.sql_store import SqlRsvpStore

@pytest.fixture
def sql_store(tmp_path):
    store = SqlRsvpStore(f"sqlite:///{tmp_path / 'rsvps.db'}")
    try:
        yield store
    finally:
        store.close()

def test_out_of_range_integer_is_storage_error(sql_store):
    """Integers the database driver cannot bind surface as storage failures"""
    with pytest.raises(StorageError):
        sql_store.delete_by_id(10 ** 20)

def test_store_usable_after_driver_error(sql_store):
    """A failed statement does not poison later calls"""
    with pytest.raises(StorageError):
        sql_store.delete_by_id(10 ** 20)

    assert sql_store.next_id() == 1
    assert sql_store.delete_by_id(1) is False
