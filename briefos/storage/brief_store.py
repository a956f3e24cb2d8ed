"""
Brief history storage.

Append-only log of generated briefs backed by SQLite. If the database
cannot be opened at startup the store keeps working from memory instead,
so the service still starts (history is then lost on restart).
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import List, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from briefos.config.settings import Settings
from briefos.errors import StoreUnavailable
from briefos.models.brief import BriefDocument, BriefRecord

from .models import BriefRow, init_db

logger = logging.getLogger(__name__)

MODE_SQLITE = "sqlite"
MODE_MEMORY = "memory"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BriefLog:
    """Base brief log backend interface."""

    mode = "abstract"
    durable = False

    def insert(self, date: str, content: str, created_at: datetime) -> BriefRecord:
        raise NotImplementedError

    def latest(self) -> Optional[BriefRecord]:
        raise NotImplementedError

    def all(self) -> List[BriefRecord]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def last_created_at(self) -> Optional[datetime]:
        latest = self.latest()
        return latest.created_at if latest else None


class InMemoryBriefLog(BriefLog):
    """
    Non-durable brief log.

    Good for tests and as a fallback when the database is unavailable.
    """

    mode = MODE_MEMORY
    durable = False

    def __init__(self):
        self._records: List[BriefRecord] = []
        self._next_id = 1

    def insert(self, date: str, content: str, created_at: datetime) -> BriefRecord:
        record = BriefRecord(id=self._next_id, date=date, content=content, created_at=created_at)
        self._next_id += 1
        self._records.append(record)
        return record

    def latest(self) -> Optional[BriefRecord]:
        records = self.all()
        return records[0] if records else None

    def all(self) -> List[BriefRecord]:
        return sorted(self._records, key=lambda r: (r.created_at, r.id), reverse=True)

    def count(self) -> int:
        return len(self._records)


class SqliteBriefLog(BriefLog):
    """Durable brief log in a local SQLite file."""

    mode = MODE_SQLITE
    durable = True

    def __init__(self, db_path: str):
        self.db_path = db_path
        try:
            self.engine = init_db(db_path)
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailable(f"Could not open brief database at {db_path}", details=str(e)) from e
        self.Session = sessionmaker(bind=self.engine, expire_on_commit=False)

    @staticmethod
    def _to_record(row: BriefRow) -> BriefRecord:
        return BriefRecord(id=row.id, date=row.date, content=row.content, created_at=row.created_at)

    def insert(self, date: str, content: str, created_at: datetime) -> BriefRecord:
        db = self.Session()
        try:
            row = BriefRow(date=date, content=content, created_at=created_at)
            db.add(row)
            db.commit()
            return self._to_record(row)
        except SQLAlchemyError:
            db.rollback()
            raise
        finally:
            db.close()

    def latest(self) -> Optional[BriefRecord]:
        db = self.Session()
        try:
            row = db.execute(
                select(BriefRow).order_by(desc(BriefRow.created_at), desc(BriefRow.id)).limit(1)
            ).scalar_one_or_none()
            return self._to_record(row) if row else None
        finally:
            db.close()

    def all(self) -> List[BriefRecord]:
        db = self.Session()
        try:
            rows = db.execute(
                select(BriefRow).order_by(desc(BriefRow.created_at), desc(BriefRow.id))
            ).scalars().all()
            return [self._to_record(row) for row in rows]
        finally:
            db.close()

    def count(self) -> int:
        db = self.Session()
        try:
            return db.execute(select(func.count(BriefRow.id))).scalar_one()
        finally:
            db.close()


class BriefStore:
    """
    Append-only store for generated briefs.

    The store assigns ``id`` and ``created_at``; callers only hand over
    documents. ``created_at`` is strictly increasing within one store so
    history order is never ambiguous.
    """

    def __init__(self, settings: Settings, backend: Optional[BriefLog] = None):
        self.settings = settings
        self.fallback_reason: Optional[str] = None

        if backend is not None:
            self.backend = backend
        else:
            try:
                self.backend = SqliteBriefLog(settings.db_path)
                logger.info(f"Brief database initialized at {settings.db_path}")
            except StoreUnavailable as e:
                self.fallback_reason = f"{e.message}: {e.details}"
                logger.warning(f"{self.fallback_reason}. Falling back to in-memory history.")
                self.backend = InMemoryBriefLog()

        self._lock = Lock()
        self._last_created_at = self.backend.last_created_at()

    @property
    def mode(self) -> str:
        return self.backend.mode

    @property
    def durable(self) -> bool:
        return self.backend.durable

    def _next_created_at(self) -> datetime:
        now = _utcnow()
        if self._last_created_at is not None and now <= self._last_created_at:
            now = self._last_created_at + timedelta(microseconds=1)
        self._last_created_at = now
        return now

    def _append_sync(self, document: BriefDocument) -> BriefRecord:
        if not document.date:
            raise ValueError("Brief must have a date before it is stored")
        content = document.to_json()
        with self._lock:
            record = self.backend.insert(document.date, content, self._next_created_at())
        logger.info(f"Stored brief {record.id} for {record.date} ({self.mode})")
        return record

    async def append(self, document: BriefDocument) -> BriefRecord:
        """Persist a brief and return its record."""
        return await asyncio.to_thread(self._append_sync, document)

    async def latest(self) -> Optional[BriefRecord]:
        """Most recently created brief, or None if history is empty."""
        return await asyncio.to_thread(self.backend.latest)

    async def list(self) -> List[BriefRecord]:
        """All briefs, most recently created first."""
        return await asyncio.to_thread(self.backend.all)

    def describe(self) -> dict:
        """Report which backend is active. Never raises."""
        try:
            count = self.backend.count()
        except SQLAlchemyError as e:
            logger.error(f"Error counting briefs: {e}")
            count = None
        return {
            "mode": self.mode,
            "durable": self.durable,
            "records": count,
            "fallback_reason": self.fallback_reason,
        }

    async def status(self) -> dict:
        """``describe()`` without blocking the event loop."""
        return await asyncio.to_thread(self.describe)
