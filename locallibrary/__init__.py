"""
Local library catalog.

Server-rendered HTML application for managing books, authors, genres and
the individual copies of each book held by the library.

Run:
    pip install -e .
    flask --app locallibrary init-db
    flask --app locallibrary seed-db
    flask --app locallibrary run

Open http://127.0.0.1:5000/
"""
from logging.config import dictConfig

from flask import Flask, redirect, request, url_for
from flask_talisman import Talisman
from flask_wtf import CSRFProtect

from .config import get_config
from .models import db

csrf = CSRFProtect()


def configure_logging(app):
    dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'default': {'format': '[%(asctime)s] [%(levelname)s] %(name)s - %(message)s'},
        },
        'handlers': {
            'wsgi': {
                'class': 'logging.StreamHandler',
                'stream': 'ext://flask.logging.wsgi_errors_stream',
                'formatter': 'default',
            },
        },
        'loggers': {
            app.import_name: {
                'level': app.config['LOG_LEVEL'],
                'handlers': ['wsgi'],
                'propagate': False,
            },
        },
    })


def create_app(config_object=None):
    """Build the application from an explicit config class or object."""
    app = Flask(__name__)
    app.config.from_object(config_object or get_config())

    configure_logging(app)

    db.init_app(app)
    csrf.init_app(app)
    Talisman(
        app,
        force_https=app.config['TALISMAN_FORCE_HTTPS'],
        session_cookie_secure=app.config['TALISMAN_FORCE_HTTPS'],
        content_security_policy=app.config['CONTENT_SECURITY_POLICY'],
    )

    from .catalog import bp as catalog_bp
    from .cli import register_commands
    from .errors import register_error_handlers

    app.register_blueprint(catalog_bp)
    register_error_handlers(app)
    register_commands(app)

    @app.route('/')
    def home():
        return redirect(url_for('catalog.index'))

    @app.after_request
    def log_request(response):
        app.logger.info("%s %s %s", request.method, request.path, response.status_code)
        return response

    return app
