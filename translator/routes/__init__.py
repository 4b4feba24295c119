"""Routes package for the translator application."""

from flask import request

from translator.locales import negotiate_locale


def register_routes(app):
    """Register all route blueprints with the application."""
    from .countries import countries_bp
    from .articles import articles_bp

    @app.before_request
    def apply_request_locale():
        negotiate_locale(request)

    app.register_blueprint(countries_bp, url_prefix='/api/countries')
    app.register_blueprint(articles_bp, url_prefix='/api/articles')
