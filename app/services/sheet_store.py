"""
Spreadsheet RSVP store backed by an .xlsx workbook

Row 1 of the RSVP worksheet is a header; every other row is one RSVP laid
out positionally in columns A-H. Rows are only ever appended or deleted.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator, List, Optional, Tuple
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from app.core.errors import StorageError
from app.schemas.rsvp import RsvpRecord, RsvpStats
from app.services.repositories import RsvpStore, tally
from app.utils.timestamps import isoformat_utc

logger = logging.getLogger(__name__)

HEADERS = ["ID", "Name", "Email", "Attendance", "Guests", "Dietary", "Message", "Created At"]
TEXT_COLUMNS = (2, 3, 4, 6, 7)  # 1-based: Name, Email, Attendance, Dietary, Message
META_SHEET = "Meta"


def _as_int(value: Any) -> Optional[int]:
    """Cell value as an integer id/count, or None when it is not one"""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


class SheetRsvpStore(RsvpStore):
    """RSVPs as rows of a worksheet, scanned linearly"""

    def __init__(self, path: str, sheet_name: str = "RSVPs"):
        self.path = Path(path)
        self.sheet_name = sheet_name
        self.workbook = self._load()
        if sheet_name not in self.workbook.sheetnames:
            self.workbook.create_sheet(sheet_name).append(HEADERS)
        self._save()
        logger.info("Opened sheet RSVP store at %s (worksheet %r)", self.path, sheet_name)

    @property
    def sheet(self):
        return self.workbook[self.sheet_name]

    def _load(self) -> Workbook:
        """The workbook as last saved, or a new one holding only the header"""
        try:
            if self.path.exists():
                return load_workbook(self.path)
        except (OSError, InvalidFileException, BadZipFile) as e:
            raise StorageError() from e
        workbook = Workbook()
        workbook.active.title = self.sheet_name
        workbook.active.append(HEADERS)
        return workbook

    def _save(self) -> None:
        try:
            self.workbook.save(self.path)
        except OSError as e:
            # Unsaved edits are dropped so reads keep matching the file
            try:
                self.workbook = self._load()
            except StorageError:
                logger.exception("Could not reload %s after a failed save", self.path)
            raise StorageError() from e

    def _rows(self) -> Iterator[Tuple[int, tuple]]:
        """(row number, values) for every data row, top to bottom"""
        rows = self.sheet.iter_rows(min_row=2, max_col=len(HEADERS), values_only=True)
        return enumerate(rows, start=2)

    def _issued(self) -> int:
        if META_SHEET not in self.workbook.sheetnames:
            return 0
        return _as_int(self.workbook[META_SHEET]["B1"].value) or 0

    def _record_issued(self, rsvp_id: int) -> None:
        if META_SHEET not in self.workbook.sheetnames:
            meta = self.workbook.create_sheet(META_SHEET)
            meta["A1"] = "last_id"
            meta.sheet_state = "hidden"
        meta = self.workbook[META_SHEET]
        if (_as_int(meta["B1"].value) or 0) < rsvp_id:
            meta["B1"] = rsvp_id

    @staticmethod
    def _to_record(row: tuple) -> Optional[RsvpRecord]:
        rsvp_id, name, email, attendance, guests, dietary, message, created_at = row
        if not _text(name).strip():
            return None
        rsvp_id = _as_int(rsvp_id)
        if rsvp_id is None:
            logger.warning("Skipping sheet row for %r without a numeric id", name)
            return None
        if isinstance(created_at, datetime):
            created_at = isoformat_utc(created_at)
        return RsvpRecord(
            id=rsvp_id,
            name=_text(name),
            email=_text(email),
            attendance=_text(attendance),
            guests=_as_int(guests) or 0,
            dietary=_text(dietary),
            message=_text(message),
            created_at=_text(created_at),
        )

    def next_id(self) -> int:
        ids = [_as_int(values[0]) for _, values in self._rows()]
        highest = max((i for i in ids if i is not None), default=0)
        return max(highest, self._issued()) + 1

    def insert(self, record: RsvpRecord) -> int:
        sheet = self.sheet
        sheet.append([
            record.id,
            record.name,
            record.email,
            record.attendance,
            record.guests,
            record.dietary,
            record.message,
            record.created_at,
        ])
        # Free text starting with "=" must not be stored as a formula
        for column in TEXT_COLUMNS:
            cell = sheet.cell(row=sheet.max_row, column=column)
            if isinstance(cell.value, str) and cell.value.startswith("="):
                cell.data_type = "s"
        self._record_issued(record.id)
        self._save()
        return record.id

    def list_all(self) -> List[RsvpRecord]:
        records = []
        for _, values in reversed(list(self._rows())):
            record = self._to_record(values)
            if record is not None:
                records.append(record)
        return records

    def delete_by_id(self, rsvp_id: int) -> bool:
        for row_number, values in self._rows():
            if _as_int(values[0]) == rsvp_id:
                self.sheet.delete_rows(row_number)
                self._save()
                return True
        return False

    def stats(self) -> RsvpStats:
        return tally(self.list_all())

    def close(self) -> None:
        self.workbook.close()
        logger.info("Closed sheet RSVP store")
