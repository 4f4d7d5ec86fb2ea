"""
Bookmarks Store - keyed storage of sync records

Records are addressed by an opaque id and carry version and timestamp
metadata. The store is owned by the application and reached through
``get_bookmarks_store()``.
"""
import uuid
from datetime import datetime
from typing import Callable, List, Optional

from ..extensions import db
from ..models import Bookmarks
from ..utils.logger import get_logger

logger = get_logger('bookmarks_store')


def generate_sync_id() -> str:
    """Opaque sync id: 32 hex chars from a random UUID4."""
    return uuid.uuid4().hex


class BookmarksStore:
    """Create/read/update/delete sync records.

    Example:
        >>> store = BookmarksStore()
        >>> record = store.create(version='1.0.0')
        >>> store.update(record.id, bookmarks='...')
        >>> store.find_by_id(record.id)
    """

    UPDATABLE_FIELDS = ('bookmarks', 'version')

    def __init__(self, session=None, clock: Callable[[], datetime] = datetime.now):
        """
        Args:
            session: SQLAlchemy session, defaults to the Flask-SQLAlchemy scoped session
            clock: Returns the current (naive, local) time
        """
        self._session = session if session is not None else db.session
        self._clock = clock

    def create(self, bookmarks: str = '', version: Optional[str] = None) -> Bookmarks:
        now = self._clock()
        record = Bookmarks(
            id=generate_sync_id(),
            bookmarks=bookmarks or '',
            version=version,
            created_at=now,
            last_updated=now,
            last_accessed=now,
        )
        self._session.add(record)
        self._session.commit()
        return record

    def find_by_id(self, sync_id: str) -> Optional[Bookmarks]:
        """Look up a record; a hit refreshes ``last_accessed``."""
        record = self._session.get(Bookmarks, sync_id)
        if record is None:
            return None
        record.last_accessed = self._clock()
        self._session.commit()
        return record

    def update(self, sync_id: str, **changes) -> Optional[Bookmarks]:
        """Merge ``bookmarks``/``version`` onto an existing record.

        Fields not passed are left unchanged. Timestamps are always
        refreshed. There is no concurrency check, the last write wins.

        Returns:
            The updated record, or None if the id is unknown
        """
        unknown = set(changes) - set(self.UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f'Cannot update fields: {", ".join(sorted(unknown))}')

        record = self._session.get(Bookmarks, sync_id)
        if record is None:
            return None

        for field, value in changes.items():
            setattr(record, field, value)

        now = self._clock()
        record.last_updated = now
        record.last_accessed = now
        self._session.commit()
        return record

    def delete(self, sync_id: str) -> bool:
        record = self._session.get(Bookmarks, sync_id)
        if record is None:
            return False
        self._session.delete(record)
        self._session.commit()
        return True

    def get_all(self) -> List[Bookmarks]:
        return self._session.query(Bookmarks).all()

    def count(self) -> int:
        return self._session.query(Bookmarks).count()

    def clear(self) -> int:
        """Delete every record. Returns the number removed."""
        removed = self._session.query(Bookmarks).delete()
        self._session.commit()
        logger.info(f"Cleared {removed} sync records")
        return removed
