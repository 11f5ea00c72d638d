"""
Tests for the spreadsheet backend's row handling
"""

from datetime import datetime

import pytest
from openpyxl import Workbook, load_workbook

from app.core.errors import StorageError
from app.schemas.rsvp import RsvpRecord
from app.services.sheet_store import HEADERS, SheetRsvpStore

def make_record(rsvp_id, name="Amy", message=""):
    return RsvpRecord(
        id=rsvp_id,
        name=name,
        email="a@x.com",
        attendance="Joyfully Accept",
        guests=2,
        message=message,
        created_at="2025-05-01T10:00:00.000Z",
    )

@pytest.fixture
def sheet_path(tmp_path):
    return tmp_path / "rsvps.xlsx"

def write_rows(path, rows, sheet_name="RSVPs"):
    """Create a workbook the way an organizer would fill one in by hand"""
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name
    ws.append(HEADERS)
    for row in rows:
        ws.append(row)
    wb.save(path)

def test_creates_workbook_with_header(sheet_path):
    """Opening a missing workbook creates it with the header row"""
    store = SheetRsvpStore(str(sheet_path))
    store.close()

    ws = load_workbook(sheet_path)["RSVPs"]
    assert [cell.value for cell in ws[1]] == HEADERS
    assert ws.max_row == 1

def test_adds_missing_worksheet(sheet_path):
    """An existing workbook without the RSVP worksheet gets one"""
    Workbook().save(sheet_path)

    store = SheetRsvpStore(str(sheet_path), sheet_name="Replies")

    assert store.list_all() == []
    assert "Replies" in load_workbook(sheet_path).sheetnames

def test_rows_persist_across_reopen(sheet_path):
    """Inserted rows are saved to disk"""
    store = SheetRsvpStore(str(sheet_path))
    store.insert(make_record(1, message="Hello"))
    store.close()

    reopened = SheetRsvpStore(str(sheet_path))
    assert reopened.list_all() == [make_record(1, message="Hello")]

def test_blank_name_rows_are_skipped(sheet_path):
    """Rows without a name are ignored on read"""
    write_rows(sheet_path, [
        [1, "Amy", "a@x.com", "Joyfully Accept", 2, "", "", "2025-05-01T10:00:00.000Z"],
        [2, None, "", "", None, "", "", ""],
        [3, "Bo", "b@x.com", "Regretfully Decline", 0, "", "", "2025-05-01T11:00:00.000Z"],
    ])
    store = SheetRsvpStore(str(sheet_path))

    assert [r.name for r in store.list_all()] == ["Bo", "Amy"]
    assert store.stats().total == 2

def test_native_datetime_cells_become_iso(sheet_path):
    """Timestamps typed into the sheet are rendered as ISO-8601"""
    write_rows(sheet_path, [
        [1, "Amy", "a@x.com", "Joyfully Accept", 2, "", "Hi", datetime(2025, 5, 1, 9, 30)],
    ])
    store = SheetRsvpStore(str(sheet_path))

    assert store.list_all()[0].created_at == "2025-05-01T09:30:00.000Z"

def test_next_id_ignores_non_numeric_ids(sheet_path):
    """Stray text in the id column does not break id assignment"""
    write_rows(sheet_path, [
        [4, "Amy", "a@x.com", "Joyfully Accept", 1, "", "", "2025-05-01T10:00:00.000Z"],
        ["n/a", "Bo", "b@x.com", "Joyfully Accept", 1, "", "", "2025-05-01T10:00:00.000Z"],
        [9.0, "Cy", "c@x.com", "Joyfully Accept", 1, "", "", "2025-05-01T10:00:00.000Z"],
    ])
    store = SheetRsvpStore(str(sheet_path))

    assert store.next_id() == 10
    assert [r.name for r in store.list_all()] == ["Cy", "Amy"]

def test_delete_removes_sheet_row(sheet_path):
    """Deletion removes the row itself, not just its contents"""
    store = SheetRsvpStore(str(sheet_path))
    store.insert(make_record(1, name="Amy"))
    store.insert(make_record(2, name="Bo"))

    assert store.delete_by_id(1)

    ws = load_workbook(sheet_path)["RSVPs"]
    assert ws.max_row == 2
    assert ws.cell(row=2, column=2).value == "Bo"

def test_text_is_never_a_formula(sheet_path):
    """Messages starting with '=' are stored as plain text"""
    store = SheetRsvpStore(str(sheet_path))
    store.insert(make_record(1, message="=SUM(1,2)"))
    store.close()

    reopened = SheetRsvpStore(str(sheet_path))
    assert reopened.list_all()[0].message == "=SUM(1,2)"
    cell = load_workbook(sheet_path)["RSVPs"].cell(row=2, column=7)
    assert cell.data_type == "s"

def test_unreadable_workbook(tmp_path):
    """A path that is not a workbook is a storage failure"""
    bogus = tmp_path / "rsvps.xlsx"
    bogus.write_text("not a spreadsheet")

    with pytest.raises(StorageError):
        SheetRsvpStore(str(bogus))

def failing_save(path):
    raise OSError("disk full")

def test_failed_insert_is_rolled_back(sheet_path, monkeypatch):
    """A row that could not be saved does not linger in memory"""
    store = SheetRsvpStore(str(sheet_path))
    store.insert(make_record(1, name="Amy"))
    monkeypatch.setattr(store.workbook, "save", failing_save)

    with pytest.raises(StorageError):
        store.insert(make_record(2, name="Bo"))

    assert [r.name for r in store.list_all()] == ["Amy"]
    assert store.next_id() == 2

def test_failed_delete_is_rolled_back(sheet_path, monkeypatch):
    """A deletion that could not be saved leaves the record in place"""
    store = SheetRsvpStore(str(sheet_path))
    store.insert(make_record(1, name="Amy"))
    monkeypatch.setattr(store.workbook, "save", failing_save)

    with pytest.raises(StorageError):
        store.delete_by_id(1)

    assert [r.name for r in store.list_all()] == ["Amy"]
    assert store.stats().total == 1
