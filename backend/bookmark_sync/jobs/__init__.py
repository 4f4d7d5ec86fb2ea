"""
Background jobs
"""
from .scheduler import start_scheduler, run_sync_log_purge

__all__ = ['start_scheduler', 'run_sync_log_purge']
