"""
Quota Service - daily new sync limit per client address

Checking and recording are two separate steps: the check runs before a
sync is created and the record only after creation succeeds. Two requests
racing under the limit can both pass the check, so the limit is
best-effort rather than a hard cap.

Quota failures never block traffic: a failed check allows the request and
a failed record is logged and dropped. Each swallowed failure rolls back
the shared session so the request can carry on using it.
"""
from dataclasses import dataclass
from typing import Dict, Optional

from ..models import NewSyncLog
from ..utils.logger import get_logger
from ..utils.timeutils import next_midnight, start_of_day, start_of_week
from .sync_log_store import SyncLogStore

logger = get_logger('quota_service')


@dataclass(frozen=True)
class QuotaCheck:
    """Result of a quota check. ``remaining``/``limit`` are -1 when unlimited."""
    allowed: bool
    remaining: int
    limit: int

    @property
    def enabled(self) -> bool:
        return self.limit > 0


UNLIMITED = QuotaCheck(allowed=True, remaining=-1, limit=-1)


class QuotaService:
    """Decides whether a client address may create another sync today.

    Example:
        >>> quota = QuotaService(SyncLogStore())
        >>> result = quota.check_quota('203.0.113.7', daily_limit=3)
        >>> if result.allowed:
        ...     create_the_sync()
        ...     quota.record_creation('203.0.113.7')
    """

    def __init__(self, log_store: SyncLogStore):
        self._log_store = log_store

    def _discard_failed_transaction(self) -> None:
        """Roll back so the shared session stays usable after a swallowed error."""
        try:
            self._log_store.rollback()
        except Exception as e:
            logger.opt(exception=e).error("Rollback after quota failure failed")

    def check_quota(self, ip_address: str, daily_limit: int) -> QuotaCheck:
        """Check the address against the daily limit (0 or less disables it)."""
        if daily_limit <= 0:
            return UNLIMITED

        try:
            count = self._log_store.count_for_address_today(ip_address)
        except Exception as e:
            logger.opt(exception=e).error(f"Quota check failed for {ip_address}, allowing request")
            self._discard_failed_transaction()
            return UNLIMITED

        result = QuotaCheck(
            allowed=count < daily_limit,
            remaining=max(0, daily_limit - count),
            limit=daily_limit,
        )
        if not result.allowed:
            logger.warning(f"Daily new syncs limit hit for {ip_address} ({count}/{daily_limit})")
        return result

    def record_creation(self, ip_address: str) -> Optional[NewSyncLog]:
        """Log a successful sync creation for the address."""
        try:
            return self._log_store.create(ip_address)
        except Exception as e:
            logger.opt(exception=e).error(f"Failed to record new sync for {ip_address}")
            self._discard_failed_transaction()
            return None

    def reset_time(self):
        """When today's quota window closes (next local midnight)."""
        return next_midnight(self._log_store.now())

    def cleanup_expired_logs(self) -> int:
        """Purge expired log entries. Returns the number removed, 0 on failure."""
        try:
            removed = self._log_store.purge_expired()
        except Exception as e:
            logger.opt(exception=e).error("Failed to purge expired sync logs")
            self._discard_failed_transaction()
            return 0
        if removed:
            logger.info(f"Purged {removed} expired sync log entries")
        return removed

    def get_sync_stats(self, ip_address: str, daily_limit: int) -> Dict[str, int]:
        """Creation counts for an address today, this week and overall (non-expired)."""
        try:
            now = self._log_store.now()
            today = self._log_store.find_by_date_range(ip_address, start_of_day(now), now)
            weekly = self._log_store.find_by_date_range(ip_address, start_of_week(now), now)
            total = self._log_store.find_by_ip_address(ip_address)
        except Exception as e:
            logger.opt(exception=e).error(f"Failed to load sync stats for {ip_address}")
            self._discard_failed_transaction()
            return {'todayCount': 0, 'weeklyCount': 0, 'totalCount': 0, 'dailyLimit': 0}

        return {
            'todayCount': len(today),
            'weeklyCount': len(weekly),
            'totalCount': len(total),
            'dailyLimit': daily_limit,
        }
