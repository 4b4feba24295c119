"""
Pytest configuration and fixtures for testing translatable models.
"""

import os
import sys
from contextlib import contextmanager

import pytest
from faker import Faker
from sqlalchemy import event, inspect

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from translator import create_app, db
from translator.models import Article, ArticleTranslation, Country

fake = Faker()


@pytest.fixture(scope='session')
def app():
    """Create application for testing.

    The current locale is Swedish and English is the fallback.
    """
    os.environ['FLASK_ENV'] = 'testing'

    app = create_app('testing', {
        'LOCALE': 'sv',
        'FALLBACK_LOCALE': 'en',
        'SUPPORTED_LOCALES': ['en', 'sv', 'de'],
    })

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create a fresh database session for each test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        yield db.session
        db.session.rollback()


def _insert_country(session, code, names):
    """Insert a country and its translations without going through the ORM."""
    table = inspect(Country.get_translation_model()).local_table
    session.execute(Country.__table__.insert(), [{'code': code}])
    session.execute(table.insert(), [
        {'country_code': code, 'locale': locale, 'name': name}
        for locale, name in names.items()
    ])


@pytest.fixture
def insert_country(db_session):
    """Insert helper bound to the test session."""
    return lambda code, names: _insert_country(db_session, code, names)


@pytest.fixture
def seeded(db_session):
    """Sweden in Swedish and English, plus one article in both locales."""
    _insert_country(db_session, 'SE', {'sv': 'Sverige', 'en': 'Sweden'})

    db_session.execute(Article.__table__.insert(), [
        {'id': 1, 'thumbnail': 'http://i.imgur.com/tyfwfEX.jpg'},
    ])
    db_session.execute(ArticleTranslation.__table__.insert(), [
        {'article_id': 1, 'locale': 'en', 'title': 'Use the force Harry'},
        {'article_id': 1, 'locale': 'sv', 'title': 'Använd kraften Harry'},
    ])
    db_session.commit()

    # Start every test from an empty identity map
    db_session.expunge_all()
    return db_session


class QueryCounter:
    """Counts statements sent to the database."""

    def __init__(self):
        self.count = 0

    def __call__(self, conn, cursor, statement, parameters, context, executemany):
        self.count += 1


@pytest.fixture
def count_queries(db_session):
    """Context manager yielding a counter of the statements run inside it."""

    @contextmanager
    def _count():
        counter = QueryCounter()
        event.listen(db.engine, 'before_cursor_execute', counter)
        try:
            yield counter
        finally:
            event.remove(db.engine, 'before_cursor_execute', counter)

    return _count
