"""
Flask Extensions

Shared extension instances, bound to the app in create_app().
"""
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

# Database holding sync records and new sync logs
db = SQLAlchemy()

# Schema migrations (python manage.py db ...)
migrate = Migrate()
