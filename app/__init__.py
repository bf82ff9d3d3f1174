# app/__init__.py - Application Factory Pattern
"""
Flask application factory for the relevés application.
Used for easier testing: each instance owns its own database handle.
"""

import logging
import os
import sys

from flask import Flask
from flask.logging import default_handler


def configure_logging(app):
    """Log to stdout by default; to logs/app.log when LOG_TO_FILE=1."""
    app.logger.removeHandler(default_handler)
    if not app.logger.handlers:
        if os.environ.get('LOG_TO_FILE') == '1':
            from logging.handlers import RotatingFileHandler
            try:
                os.makedirs('logs', exist_ok=True)
                file_handler = RotatingFileHandler('logs/app.log', maxBytes=10240, backupCount=3)
                file_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'))
                file_handler.setLevel(logging.INFO)
                app.logger.addHandler(file_handler)
            except OSError:
                # fallback to stderr if file logging cannot be configured
                app.logger.addHandler(logging.StreamHandler(sys.stderr))
                app.logger.warning('Could not configure file logging; logs will be sent to stderr')
        else:
            app.logger.addHandler(logging.StreamHandler(sys.stdout))
    app.logger.setLevel(logging.INFO)


def create_app(config_class=None):
    """
    Application Factory Pattern

    Args:
        config_class: Configuration class (default: Config from config.py)

    Returns:
        Flask application instance
    """
    app = Flask(__name__,
                template_folder='../templates',
                static_folder='../static')

    # Load configuration
    if config_class is None:
        from config import Config
        config_class = Config
    app.config.from_object(config_class)

    # Payload keys keep the order they were submitted in
    app.json.sort_keys = False

    configure_logging(app)

    # Initialize extensions
    from app.extensions import init_extensions, db
    init_extensions(app)

    with app.app_context():
        db.create_all()

    # Register blueprints
    from app.blueprints.releves import releves_bp
    app.register_blueprint(releves_bp)

    # CLI commands
    from app.cli import register_commands
    register_commands(app)

    app.logger.info('Application startup')
    return app
