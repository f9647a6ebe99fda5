"""
Application entry point with environment-specific server configuration
"""
import os
import sys

from certiswift import create_app
from certiswift.env_config import ENVIRONMENT
from certiswift.utils.logger import custom_logger, setup_logging

HOST = os.getenv('HOST', '0.0.0.0')
PORT = int(os.getenv('PORT', '5000'))
WORKERS = int(os.getenv('WEB_CONCURRENCY', '4'))


@custom_logger.log_function_call
def run_development_server():
    """Run the development server with debug mode and hot reloading"""
    try:
        app = create_app()

        custom_logger.logger.info("Starting development server with hot reloading enabled...")
        app.run(
            host=HOST,
            port=PORT,
            debug=True,
            use_reloader=True
        )
    except Exception as e:
        custom_logger.logger.error(f"Failed to start development server: {str(e)}")
        sys.exit(1)


@custom_logger.log_function_call
def run_production_server():
    """Run the production server based on the operating system"""
    try:
        app = create_app()

        if sys.platform == 'win32':
            # Windows: Use waitress
            try:
                from waitress import serve
                custom_logger.logger.info("Starting production server with waitress...")
                serve(app, host=HOST, port=PORT)
            except ImportError:
                custom_logger.logger.error("Please install waitress for Windows production deployment")
                custom_logger.logger.error("Run: pip install waitress")
                sys.exit(1)
        else:
            # Unix/Linux: Use gunicorn
            try:
                import gunicorn.app.base

                class StandaloneApplication(gunicorn.app.base.BaseApplication):
                    def __init__(self, app, options=None):
                        self.options = options or {}
                        self.application = app
                        super().__init__()

                    def load_config(self):
                        for key, value in self.options.items():
                            self.cfg.set(key.lower(), value)

                    def load(self):
                        return self.application

                options = {
                    'bind': f'{HOST}:{PORT}',
                    'workers': WORKERS,
                    'worker_class': 'gthread',
                    'threads': 2
                }

                custom_logger.logger.info("Starting production server with gunicorn...")
                StandaloneApplication(app, options).run()

            except ImportError:
                custom_logger.logger.error("Failed to import gunicorn")
                custom_logger.logger.error("Please install gunicorn for Unix/Linux production deployment")
                custom_logger.logger.error("Run: pip install gunicorn")
                sys.exit(1)

    except Exception as e:
        custom_logger.logger.error(f"Failed to start production server: {str(e)}")
        sys.exit(1)


if __name__ == '__main__':
    setup_logging()
    if ENVIRONMENT == 'production':
        run_production_server()
    else:
        run_development_server()
