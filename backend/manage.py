#!/usr/bin/env python
"""
Management Script

CLI commands for database and sync log maintenance.

Usage:
    # Flask-Migrate commands
    python manage.py db upgrade

    # Purge expired new sync log entries
    python manage.py purge-sync-logs

    # New sync counts for an address
    python manage.py sync-stats 203.0.113.7

    # Database connection and row counts
    python manage.py db-status
"""
import os
import sys

# Add the backend directory to the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from flask.cli import with_appcontext
import click

from bookmark_sync import create_app
from bookmark_sync.extensions import db
from bookmark_sync.services import get_services

# Create app instance
app = create_app()


@app.cli.command('db-status')
@with_appcontext
def db_status():
    """Show database connection status and row counts."""
    try:
        db.session.execute(db.text('SELECT 1')).fetchone()
        click.echo(click.style('✓ Database connection OK', fg='green'))

        services = get_services()
        click.echo(f'  - sync records: {services.bookmarks_store.count()}')
        click.echo(f'  - sync log entries: {len(services.sync_log_store.get_all())}')
    except Exception as e:
        click.echo(click.style(f'✗ Database error: {e}', fg='red'))


@app.cli.command('purge-sync-logs')
@with_appcontext
def purge_sync_logs():
    """Delete expired new sync log entries."""
    removed = get_services().quota_service.cleanup_expired_logs()
    if removed > 0:
        click.echo(click.style(f'✓ Purged {removed} expired entries', fg='green'))
    else:
        click.echo('No expired entries found')


@app.cli.command('sync-stats')
@click.argument('ip_address')
@with_appcontext
def sync_stats(ip_address):
    """Show new sync counts for an address."""
    stats = get_services().quota_service.get_sync_stats(
        ip_address, app.config['DAILY_NEW_SYNCS_LIMIT']
    )
    for key, value in stats.items():
        click.echo(f'{key}: {value}')


if __name__ == '__main__':
    import subprocess

    if len(sys.argv) > 1 and sys.argv[1] == 'db':
        # Use flask db commands
        os.environ['FLASK_APP'] = 'manage.py'
        subprocess.run(['flask'] + sys.argv[1:])
    else:
        app.cli()
