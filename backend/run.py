"""
Application entry point
Bookmark sync service - backend

Usage:
    python run.py

Environment:
    - Copy env.example to .env
    - Adjust the values as needed
"""
import sys
import os

# Add the backend directory to the Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from bookmark_sync import create_app
from bookmark_sync.config import get_config

config_class = get_config()

app = create_app(config_class)

if __name__ == '__main__':
    env = os.environ.get('FLASK_ENV', 'development')
    if env == 'production':
        config_class.validate()

    host = app.config['HOST']
    port = app.config['PORT']
    prefix = app.config['API_PREFIX']

    print("=" * 60)
    print("🔖 Bookmark sync service - backend")
    print("=" * 60)
    print(f"📌 Service: http://localhost:{port}")
    print(f"📌 API: http://localhost:{port}{prefix}")
    print(f"📌 Environment: {env}")
    print(f"📌 Database: {app.config['SQLALCHEMY_DATABASE_URI']}")
    print(f"📌 CORS origins: {', '.join(config_class.CORS_ORIGINS) or '*'}")

    if app.config['NEW_SYNCS_ENABLED']:
        print("✅ New syncs: accepted")
    else:
        print("⛔ New syncs: disabled (NEW_SYNCS_ENABLED)")

    limit = app.config['DAILY_NEW_SYNCS_LIMIT']
    if limit > 0:
        print(f"🔒 Daily new syncs limit: {limit} per address")
    else:
        print("⚠️  Daily new syncs limit: disabled")

    print(f"📦 Max sync size: {app.config['MAX_SYNC_SIZE']} bytes")
    print("=" * 60)

    app.run(host=host, port=port, debug=(env == 'development'), use_reloader=False)
