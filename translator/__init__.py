"""Attribute-level localization for Flask-SQLAlchemy models."""

import logging
import os

from dotenv import load_dotenv
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event

load_dotenv()

db = SQLAlchemy()

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on."""
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


def _split_locales(value):
    return [locale.strip() for locale in value.split(',') if locale.strip()]


def create_app(config_name='development', config=None):
    app = Flask(__name__)

    # Config
    if config_name == 'testing':
        app.config['TESTING'] = True
        app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite://'
    else:
        app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv(
            'DATABASE_URL',
            'sqlite:///translator.db'
        )

    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['LOCALE'] = os.getenv('APP_LOCALE', 'en')
    app.config['FALLBACK_LOCALE'] = os.getenv('APP_FALLBACK_LOCALE', 'en')
    app.config['SUPPORTED_LOCALES'] = _split_locales(os.getenv('APP_SUPPORTED_LOCALES', 'en'))
    app.config['LOG_LEVEL'] = os.getenv('LOG_LEVEL', 'INFO')

    if config:
        app.config.update(config)

    logging.basicConfig(level=app.config['LOG_LEVEL'])

    # Initialize extensions
    db.init_app(app)

    with app.app_context():
        if db.engine.dialect.name == 'sqlite':
            event.listen(db.engine, 'connect', _enable_sqlite_foreign_keys)

        # Models have to be imported before create_all sees their tables
        from translator import models  # noqa: F401

        try:
            db.create_all()
        except Exception as e:
            logger.warning(f"Could not create database tables: {e}")

    from translator.routes import register_routes
    register_routes(app)

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}, 200

    return app
