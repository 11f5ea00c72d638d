"""
Timestamp helpers
"""

from datetime import datetime, timezone
from typing import Optional


def isoformat_utc(moment: Optional[datetime] = None) -> str:
    """Render ``moment`` (default: now) as ``YYYY-MM-DDTHH:MM:SS.sssZ``.

    Naive datetimes are taken to be UTC already.
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"
