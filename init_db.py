#!/usr/bin/env python
"""Database initialization script for the translator application.

This script creates all database tables based on the SQLAlchemy models,
including the derived translation tables, and optionally seeds sample data.

Usage:
    python init_db.py [--seed]
"""

import os
import sys
from translator import create_app, db
from translator.locales import locale_override


def seed_database():
    """Insert a country and an article translated into English and Swedish."""
    from translator.models import Article, Country

    if db.session.get(Country, 'SE') is None:
        country = Country(code='SE')
        with locale_override('en'):
            country.name = 'Sweden'
        with locale_override('sv'):
            country.name = 'Sverige'
        country.save()

    if Article.query.count() == 0:
        article = Article(thumbnail='http://i.imgur.com/tyfwfEX.jpg')
        with locale_override('en'):
            article.set_attribute('title', 'Use the force Harry')
        with locale_override('sv'):
            article.set_attribute('title', 'Använd kraften Harry')
        article.save()


def init_database(seed=False):
    """Initialize the database by creating all tables."""

    # Create Flask app
    config_name = os.getenv('FLASK_ENV', 'development')
    app = create_app(config_name)

    print(f"\n{'='*60}")
    print(f"Database Initialization for {config_name.upper()} Environment")
    print(f"{'='*60}\n")

    with app.app_context():
        try:
            print("Creating database tables...")
            print(f"Database URI: {app.config['SQLALCHEMY_DATABASE_URI']}\n")

            db.create_all()

            print("✅ Database tables created successfully!\n")

            print("Created tables:")
            for table_name in db.metadata.tables:
                print(f"  ✓ {table_name}")

            if seed:
                seed_database()
                print("\n✅ Sample countries and articles inserted")

            print(f"\n{'='*60}")
            print("✅ Database initialization complete!")
            print(f"{'='*60}\n")
            print("Next steps:")
            print("  1. Start the Flask server: python wsgi.py")
            print("  2. Try it: GET /api/countries/SE?locale=sv")
            print("\n")

            return True

        except Exception as e:
            db.session.rollback()
            print(f"❌ Error creating database: {e}\n")
            print(f"Traceback: {type(e).__name__}: {str(e)}")
            return False


if __name__ == '__main__':
    success = init_database(seed='--seed' in sys.argv[1:])
    sys.exit(0 if success else 1)
