"""
Main application initialization module.
Sets up Flask app with all necessary configurations and extensions.
"""
import logging
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import Config
from .extensions import cache, cors

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def create_app(config_overrides: Optional[Dict[str, Any]] = None) -> Flask:
    """
    Create and configure the Flask application
    @param config_overrides: dict - Settings applied on top of Config
    @returns: Flask - Configured Flask application instance
    @raises ValueError: If the Supabase URL or key is missing
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    Config.validate(app.config)

    if app.config.get('PROXY_FIX_X_FOR'):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=app.config['PROXY_FIX_X_FOR'])

    cors.init_app(app, resources={
        r"/api/*": {
            "origins": app.config['CORS_ORIGINS'],
            "supports_credentials": True,
        }
    })
    cache.init_app(app)

    _init_support_service(app)

    # Register blueprints with error handling
    try:
        from .controllers.course_controller import course_bp
        app.register_blueprint(course_bp, url_prefix='/api')
        logger.info("Successfully registered course blueprint")

        from .controllers.admin_controller import admin_bp
        app.register_blueprint(admin_bp, url_prefix='/api/admin')
        logger.info("Successfully registered admin blueprint")

        from .controllers.progress_controller import progress_bp
        app.register_blueprint(progress_bp, url_prefix='/api')
        logger.info("Successfully registered progress blueprint")

        from .controllers.rating_controller import rating_bp
        app.register_blueprint(rating_bp, url_prefix='/api')
        logger.info("Successfully registered rating blueprint")

        from .controllers.favorite_controller import favorite_bp
        app.register_blueprint(favorite_bp, url_prefix='/api')
        logger.info("Successfully registered favorite blueprint")

        from .controllers.achievement_controller import achievement_bp
        app.register_blueprint(achievement_bp, url_prefix='/api')
        logger.info("Successfully registered achievement blueprint")

        from .controllers.dashboard_controller import dashboard_bp
        app.register_blueprint(dashboard_bp, url_prefix='/api')
        logger.info("Successfully registered dashboard blueprint")

        from .controllers.support_controller import support_bp
        app.register_blueprint(support_bp, url_prefix='/api')
        logger.info("Successfully registered support blueprint")

    except Exception as e:
        logger.error(f"Error registering blueprints: {str(e)}")
        raise

    @app.route('/health', methods=['GET'])
    def health_check():
        from .utils.supabase_utils import get_supabase_client, test_connection
        try:
            connected = test_connection(get_supabase_client())
        except Exception as e:
            logger.error(f"Supabase client unavailable: {str(e)}")
            connected = False
        status = 'healthy' if connected else 'degraded'
        return {'status': status, 'database': connected}, 200 if connected else 503

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        logger.error(f"HTTP error: {str(e)}")
        return jsonify({
            'error': e.name,
            'details': e.description
        }), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        logger.error(f"Unhandled error: {str(e)}", exc_info=True)
        return jsonify({
            'error': 'Internal server error',
            'details': str(e)
        }), 500

    return app


def _init_support_service(app: Flask) -> None:
    """Wire the support intake to its webhook sink, DNS verifier and rate-limit store."""
    from .services.notification_sink import WebhookNotificationSink
    from .services.support_service import DomainVerifier, SubmissionRateLimiter, SupportService

    timeout = app.config['REQUEST_TIMEOUT']
    app.extensions['support_service'] = SupportService(
        sink=WebhookNotificationSink(app.config.get('SUPPORT_WEBHOOK_URL'), timeout=timeout),
        verifier=DomainVerifier(app.config['DNS_RESOLVER_URL'], timeout=timeout),
        rate_limiter=SubmissionRateLimiter(cache, app.config['SUPPORT_RATE_LIMIT_SECONDS']),
    )
