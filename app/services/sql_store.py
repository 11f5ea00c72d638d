"""
Relational RSVP store backed by a SQLAlchemy table
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List

from sqlalchemy import case, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.db import Base, make_engine, make_session_factory
from app.core.errors import StorageError
from app.models import IdCounter, Rsvp
from app.schemas.rsvp import Attendance, RsvpRecord, RsvpStats
from app.services.repositories import RsvpStore

logger = logging.getLogger(__name__)


class SqlRsvpStore(RsvpStore):
    """RSVPs as rows of the ``rsvps`` table"""

    COUNTER_NAME = "rsvps"

    def __init__(self, database_url: str):
        self.database_url = database_url
        try:
            self.engine = make_engine(database_url)
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StorageError() from e
        self.SessionLocal = make_session_factory(self.engine)
        logger.info("Opened SQL RSVP store at %s", self.engine.url.render_as_string(hide_password=True))

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        except (SQLAlchemyError, OverflowError) as e:
            db.rollback()
            raise StorageError() from e
        finally:
            db.close()

    def next_id(self) -> int:
        with self._session() as db:
            highest = db.query(func.max(Rsvp.id)).scalar() or 0
            counter = db.get(IdCounter, self.COUNTER_NAME)
            issued = counter.value if counter else 0
        return max(highest, issued) + 1

    def insert(self, record: RsvpRecord) -> int:
        with self._session() as db:
            db.add(Rsvp(**record.model_dump()))
            counter = db.get(IdCounter, self.COUNTER_NAME)
            if counter is None:
                db.add(IdCounter(name=self.COUNTER_NAME, value=record.id))
            elif counter.value < record.id:
                counter.value = record.id
            db.commit()
        return record.id

    def list_all(self) -> List[RsvpRecord]:
        with self._session() as db:
            rows = (
                db.query(Rsvp)
                .filter(Rsvp.name != "")
                .order_by(Rsvp.created_at.desc(), Rsvp.id.desc())
                .all()
            )
            return [RsvpRecord.model_validate(row) for row in rows]

    def delete_by_id(self, rsvp_id: int) -> bool:
        with self._session() as db:
            deleted = db.query(Rsvp).filter(Rsvp.id == rsvp_id).delete()
            db.commit()
        return deleted > 0

    def stats(self) -> RsvpStats:
        accept = Attendance.ACCEPT.value
        decline = Attendance.DECLINE.value
        with self._session() as db:
            total, accepted, declined, total_guests = (
                db.query(
                    func.count(Rsvp.id),
                    func.coalesce(func.sum(case((Rsvp.attendance == accept, 1), else_=0)), 0),
                    func.coalesce(func.sum(case((Rsvp.attendance == decline, 1), else_=0)), 0),
                    func.coalesce(func.sum(case((Rsvp.attendance == accept, Rsvp.guests), else_=0)), 0),
                )
                .filter(Rsvp.name != "")
                .one()
            )
        return RsvpStats(
            total=total,
            accepted=accepted,
            declined=declined,
            total_guests=total_guests,
        )

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Closed SQL RSVP store")
