# reset_api/__init__.py

import logging
from flask import Flask
from flask.logging import default_handler
from .config import Settings, ConfigError
from .cors import CorsPolicy, install_cors
from .db import mongo
from .errors import register_error_handlers

__all__ = ['create_app', 'Settings', 'ConfigError', 'CorsPolicy', 'mongo']


def configure_logging(app, level):
    # Replace Flask's default handler (and ours, if an app was built before)
    app.logger.removeHandler(default_handler)
    app.logger.handlers.clear()
    app.logger.setLevel(level)
    handler = logging.StreamHandler()
    handler.setLevel(level)
    formatter = logging.Formatter('[%(asctime)s] %(levelname)s: %(message)s')
    handler.setFormatter(formatter)
    app.logger.addHandler(handler)


def create_app(settings=None):
    """
    Builds the Flask app. Startup order matters:

        1. settings (read from the environment unless given)
        2. logging
        3. CORS policy
        4. MongoDB connection attempt (background, never fatal)
        5. body limits and JSON error handlers
        6. route blueprints
    """
    if settings is None:
        settings = Settings.from_env()

    app = Flask(__name__)
    app.config['APP_SETTINGS'] = settings
    # Request bodies above this size are answered with 413
    app.config['MAX_CONTENT_LENGTH'] = settings.max_content_length
    app.json.sort_keys = False

    configure_logging(app, settings.log_level)
    app.logger.info(f"Starting in {settings.environment} mode")

    install_cors(app, CorsPolicy.from_settings(settings))

    mongo.init_app(app, settings)

    register_error_handlers(app)

    from .api.health import bp as health_bp
    from .api.password_reset import bp as password_reset_bp
    from .api.user import bp as user_bp

    app.register_blueprint(password_reset_bp, url_prefix='/api/password-reset')
    app.register_blueprint(user_bp, url_prefix='/api/user')
    app.register_blueprint(health_bp, url_prefix='/api')

    return app
