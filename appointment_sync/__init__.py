"""
Appointment Tag Sync
Flask application factory
"""
import os
import logging
from flask import Flask
from flask_cors import CORS

from .config import get_config
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(config_name: str = None) -> Flask:
    """
    Application factory for creating Flask app instances.

    Args:
        config_name: Configuration environment (development, production, testing)

    Returns:
        Configured Flask application
    """
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    # Setup logging before anything else logs
    setup_logging(app.config.get('LOG_LEVEL'))

    # CORS for everything outside the webhook blueprint, which sets its own headers
    CORS(
        app,
        origins=[app.config['ALLOWED_ORIGIN']],
        methods=['GET', 'POST', 'OPTIONS'],
        allow_headers=['Content-Type', 'X-Source']
    )

    register_blueprints(app)

    # Register CLI commands
    from .commands import init_app as init_commands
    init_commands(app)

    register_error_handlers(app)

    # Health check endpoint
    @app.route('/health')
    def health_check():
        return {'status': 'healthy', 'service': 'appointment-sync'}

    logger.info(f'Appointment sync app created ({config_name})')
    return app


def register_blueprints(app: Flask) -> None:
    """Register all blueprints."""
    from .webhooks.appointment import appointment_webhook_bp

    app.register_blueprint(appointment_webhook_bp, url_prefix='/api')


def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""
    from .utils.errors import not_found, internal_error, method_not_allowed
    from .webhooks.appointment import set_cors_headers

    # Methods the webhook route doesn't list (TRACE, custom verbs) fail at routing,
    # before the blueprint's after_request can run
    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        response, status_code = method_not_allowed()
        return set_cors_headers(response), status_code

    @app.errorhandler(404)
    def handle_not_found(error):
        return not_found(str(error))

    @app.errorhandler(500)
    def handle_internal_error(error):
        return internal_error(str(error))
