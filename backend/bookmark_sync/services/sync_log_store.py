"""
Sync Log Store - per-address log of new sync creations

Entries expire at the local midnight following their creation. Expired
entries are ignored by every query and may be purged at any time.
"""
import uuid
from datetime import datetime
from typing import Callable, List

from ..extensions import db
from ..models import NewSyncLog
from ..utils.logger import get_logger
from ..utils.timeutils import next_midnight, start_of_day

logger = get_logger('sync_log_store')


class SyncLogStore:
    """Creation event log used for daily quota accounting.

    Example:
        >>> store = SyncLogStore()
        >>> store.create('203.0.113.7')
        >>> store.count_for_address_today('203.0.113.7')
        1
        >>> store.purge_expired()
        0
    """

    def __init__(self, session=None, clock: Callable[[], datetime] = datetime.now):
        """
        Args:
            session: SQLAlchemy session, defaults to the Flask-SQLAlchemy scoped session
            clock: Returns the current (naive, local) time
        """
        self._session = session if session is not None else db.session
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def create(self, ip_address: str) -> NewSyncLog:
        now = self._clock()
        entry = NewSyncLog(
            id=uuid.uuid4().hex,
            ip_address=ip_address,
            sync_created=now,
            expires_at=next_midnight(now),
        )
        self._session.add(entry)
        self._session.commit()
        return entry

    def _live_query(self, ip_address: str, now: datetime):
        return self._session.query(NewSyncLog).filter(
            NewSyncLog.ip_address == ip_address,
            NewSyncLog.expires_at > now,
        )

    def find_by_ip_address(self, ip_address: str) -> List[NewSyncLog]:
        """Non-expired entries for an address."""
        return self._live_query(ip_address, self._clock()).all()

    def find_by_date_range(
        self,
        ip_address: str,
        start: datetime,
        end: datetime,
    ) -> List[NewSyncLog]:
        """Non-expired entries for an address created within [start, end]."""
        return (
            self._live_query(ip_address, self._clock())
            .filter(NewSyncLog.sync_created >= start, NewSyncLog.sync_created <= end)
            .order_by(NewSyncLog.sync_created.asc())
            .all()
        )

    def count_for_address_today(self, ip_address: str) -> int:
        now = self._clock()
        return (
            self._live_query(ip_address, now)
            .filter(
                NewSyncLog.sync_created >= start_of_day(now),
                NewSyncLog.sync_created <= now,
            )
            .count()
        )

    def purge_expired(self) -> int:
        """Delete entries whose expiry has passed. Returns the number removed."""
        removed = (
            self._session.query(NewSyncLog)
            .filter(NewSyncLog.expires_at <= self._clock())
            .delete()
        )
        self._session.commit()
        return removed

    def delete(self, log_id: str) -> bool:
        entry = self._session.get(NewSyncLog, log_id)
        if entry is None:
            return False
        self._session.delete(entry)
        self._session.commit()
        return True

    def rollback(self) -> None:
        """Discard the current (failed) transaction."""
        self._session.rollback()

    def get_all(self) -> List[NewSyncLog]:
        return self._session.query(NewSyncLog).all()

    def clear(self) -> int:
        """Delete every entry. Returns the number removed."""
        removed = self._session.query(NewSyncLog).delete()
        self._session.commit()
        logger.info(f"Cleared {removed} sync log entries")
        return removed
