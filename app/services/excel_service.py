"""
Excel export of collected RSVPs
"""

import io
from typing import List

import pandas as pd

from app.schemas.rsvp import RsvpRecord
from app.services.sheet_store import HEADERS

class ExcelService:
    """Service for handling Excel operations"""

    SHEET_NAME = "RSVPs"
    FIELDS = ["id", "name", "email", "attendance", "guests", "dietary", "message", "created_at"]

    @staticmethod
    def export_rsvps(records: List[RsvpRecord]) -> bytes:
        """Export RSVPs to an .xlsx workbook laid out like the sheet backend"""
        rows = [[getattr(record, field) for field in ExcelService.FIELDS] for record in records]
        df = pd.DataFrame(rows, columns=HEADERS)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name=ExcelService.SHEET_NAME)

        return buffer.getvalue()
