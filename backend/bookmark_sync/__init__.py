"""
Flask Application Factory

This module creates and configures the Flask application.
"""
import time
from datetime import datetime

from flask import Flask, g, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .config import get_config
from .extensions import db, migrate
from .api import bookmarks_bp, info_bp, sync_logs_bp
from .jobs import start_scheduler
from .middleware import add_rate_limit_headers, add_security_headers, get_client_ip_address
from .services import init_services
from .utils.errors import APIError
from .utils.logger import setup_logger, get_logger, log_api_request, log_api_response, mask_path
from .utils.responses import ApiResponse

SERVICE_NAME = 'bookmark-sync'


def create_app(config_class=None, clock=datetime.now):
    """Create and configure Flask application.

    Args:
        config_class: Configuration class to use. If None, auto-detect from environment.
        clock: Returns the current (naive, local) time; used for all stored timestamps.

    Returns:
        Configured Flask application instance
    """
    if config_class is None:
        config_class = get_config()

    app = Flask(__name__)
    app.config.from_object(config_class)

    setup_logger(
        log_level=app.config.get('LOG_LEVEL', 'INFO'),
        log_file=app.config.get('LOG_FILE')
    )

    logger = get_logger('app')

    CORS(app, resources={f"{app.config['API_PREFIX']}/*": config_class.get_cors_config()})

    db.init_app(app)
    migrate.init_app(app, db)

    init_services(app, clock=clock)

    _register_blueprints(app)

    with app.app_context():
        db.create_all()

    _register_error_handlers(app)
    _register_request_hooks(app)
    _register_health_check(app)

    start_scheduler(app)

    db_uri = app.config.get('SQLALCHEMY_DATABASE_URI', '')
    logger.info(f"Application initialized, database: {db_uri}")

    return app


def _register_blueprints(app):
    """Register API blueprints under the configured prefix."""
    prefix = app.config['API_PREFIX']
    app.register_blueprint(bookmarks_bp, url_prefix=prefix)
    app.register_blueprint(info_bp, url_prefix=prefix)
    app.register_blueprint(sync_logs_bp, url_prefix=prefix)


def _register_error_handlers(app):
    """Map every failure to the uniform {error, code} body."""

    @app.errorhandler(APIError)
    def api_error(error):
        logger = get_logger('error')
        logger.info(f"{request.method} {mask_path(request.path)} -> {error.status_code} {error.code}: {error.message}")
        return ApiResponse.from_exception(error)

    @app.errorhandler(400)
    def bad_request(error):
        msg = str(error.description) if hasattr(error, 'description') else 'Bad request'
        return ApiResponse.error(msg, 400, 'BAD_REQUEST')

    @app.errorhandler(404)
    def not_found(error):
        return ApiResponse.not_found('Resource not found')

    @app.errorhandler(405)
    def method_not_allowed(error):
        return ApiResponse.error('Method not allowed', 405, 'METHOD_NOT_ALLOWED')

    @app.errorhandler(Exception)
    def internal_error(error):
        if isinstance(error, HTTPException):
            return ApiResponse.error(error.description, error.code, error.name.upper().replace(' ', '_'))
        logger = get_logger('error')
        logger.opt(exception=error).error(f"Unhandled error on {request.method} {mask_path(request.path)}")
        return ApiResponse.server_error('Internal server error')


def _register_request_hooks(app):
    """Register request logging, timing and response header hooks."""

    @app.before_request
    def before_request():
        g.start_time = time.time()
        log_api_request(
            request.method,
            request.path,
            get_client_ip_address(),
            request.headers.get('User-Agent', 'unknown'),
        )

    @app.after_request
    def after_request(response):
        if hasattr(g, 'start_time'):
            duration = (time.time() - g.start_time) * 1000
            log_api_response(request.method, request.path, response.status_code, duration)
        return response

    app.after_request(add_rate_limit_headers)
    app.after_request(add_security_headers)


def _register_health_check(app):
    """Register health check endpoint."""

    @app.route(f"{app.config['API_PREFIX']}/health")
    def health_check():
        """Health check endpoint for container orchestration."""
        return ApiResponse.success({
            'status': 'healthy',
            'service': SERVICE_NAME
        })
