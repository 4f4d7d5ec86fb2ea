"""
Application configuration
Values are read from environment variables (optionally from a .env file)
"""
import os

from dotenv import load_dotenv

load_dotenv()

# Absolute path of the backend directory
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULT_MAX_SYNC_SIZE = 5242880  # 5MB
DEFAULT_STATUS_MESSAGE = 'xBrowserSync Service - Online'
DEFAULT_VERSION = '1.1.8'


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or value.strip() == '':
        return default
    return int(value)


class Config:
    """Base configuration"""

    # ==================== Database ====================
    DATABASE_URL = os.environ.get('DATABASE_URL')
    if DATABASE_URL:
        SQLALCHEMY_DATABASE_URI = DATABASE_URL
    else:
        SQLALCHEMY_DATABASE_URI = f'sqlite:///{os.path.join(BASE_DIR, "bookmark_sync.db")}'

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # ==================== Server ====================
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = _env_int('PORT', 8000)
    API_PREFIX = os.environ.get('API_PREFIX', '/api')

    # ==================== CORS ====================
    # Comma-separated origins; empty or '*' allows any origin
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get('CORS_ORIGINS', '').split(',')
        if origin.strip()
    ]

    # ==================== Logging ====================
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_FILE = os.environ.get('LOG_FILE')

    # ==================== Sync service ====================
    # Per-address daily limit of new syncs, 0 disables the limit
    DAILY_NEW_SYNCS_LIMIT = _env_int('DAILY_NEW_SYNCS_LIMIT', 3)
    # Maximum UTF-8 byte length of a bookmarks payload
    MAX_SYNC_SIZE = _env_int('MAX_SYNC_SIZE', DEFAULT_MAX_SYNC_SIZE)
    # Whether the service accepts new syncs
    NEW_SYNCS_ENABLED = _env_bool('NEW_SYNCS_ENABLED', True)
    LOCATION = os.environ.get('LOCATION')
    STATUS_MESSAGE = os.environ.get('STATUS_MESSAGE', DEFAULT_STATUS_MESSAGE)
    VERSION = os.environ.get('VERSION', DEFAULT_VERSION)

    # ==================== Background jobs ====================
    SCHEDULER_ENABLED = _env_bool('SCHEDULER_ENABLED', True)
    SYNC_LOG_PURGE_INTERVAL_MINUTES = _env_int('SYNC_LOG_PURGE_INTERVAL_MINUTES', 60)

    @classmethod
    def get_cors_config(cls):
        """CORS options for Flask-CORS"""
        origins = cls.CORS_ORIGINS or '*'
        if '*' in cls.CORS_ORIGINS:
            origins = '*'
        return {
            "origins": origins,
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization", "X-Requested-With"],
            "expose_headers": [
                "X-RateLimit-Limit",
                "X-RateLimit-Remaining",
                "X-RateLimit-Reset",
            ],
            "max_age": 86400,
        }


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    LOG_LEVEL = 'DEBUG'


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'WARNING')

    @classmethod
    def validate(cls):
        """Report settings that look wrong for a production deployment"""
        errors = []

        if not os.environ.get('DATABASE_URL'):
            errors.append('DATABASE_URL is not set, using the local SQLite file')

        if cls.MAX_SYNC_SIZE <= 0:
            errors.append('MAX_SYNC_SIZE must be positive')

        if cls.DAILY_NEW_SYNCS_LIMIT <= 0:
            errors.append('DAILY_NEW_SYNCS_LIMIT is 0, new syncs are not rate limited')

        if errors:
            print("⚠️ Production configuration warnings:")
            for error in errors:
                print(f"  - {error}")

        return errors


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SCHEDULER_ENABLED = False
    LOG_LEVEL = 'WARNING'
    LOG_FILE = None
    API_PREFIX = '/api'
    CORS_ORIGINS = []
    DAILY_NEW_SYNCS_LIMIT = 3
    MAX_SYNC_SIZE = DEFAULT_MAX_SYNC_SIZE
    NEW_SYNCS_ENABLED = True
    LOCATION = None
    STATUS_MESSAGE = DEFAULT_STATUS_MESSAGE
    VERSION = DEFAULT_VERSION


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config():
    """Pick the configuration class from FLASK_ENV"""
    env = os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
