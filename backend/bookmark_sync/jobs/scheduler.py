"""
Periodic purge of expired new sync log entries

Expired entries are already excluded from quota counts, so the purge only
bounds storage growth.
"""
import os

from apscheduler.schedulers.background import BackgroundScheduler

from ..services import get_services
from ..utils.logger import get_logger

logger = get_logger('scheduler')

scheduler = BackgroundScheduler()

PURGE_JOB_ID = 'sync_log_purge'


def run_sync_log_purge(app) -> int:
    with app.app_context():
        return get_services(app).quota_service.cleanup_expired_logs()


def start_scheduler(app):
    if not app.config.get('SCHEDULER_ENABLED', True):
        return
    # Skip the parent process of the werkzeug reloader
    if os.environ.get('WERKZEUG_RUN_MAIN') == 'false':
        return

    interval_minutes = app.config['SYNC_LOG_PURGE_INTERVAL_MINUTES']
    if not scheduler.get_jobs():
        scheduler.add_job(
            run_sync_log_purge,
            'interval',
            minutes=interval_minutes,
            kwargs={'app': app},
            id=PURGE_JOB_ID,
            replace_existing=True,
        )
        scheduler.start()
        logger.info(f"Sync log purge scheduled every {interval_minutes} minutes")
