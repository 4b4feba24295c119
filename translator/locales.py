"""Current and fallback locale resolution.

The current locale lives on ``flask.g`` so every application or request
context carries its own value instead of sharing a process-wide global.
It defaults to ``app.config['LOCALE']``; the fallback comes from
``app.config['FALLBACK_LOCALE']``.
"""

from contextlib import contextmanager

from flask import current_app, g


def get_locale() -> str:
    """Return the locale of the active context."""
    locale = g.get('locale')
    if locale:
        return locale
    return current_app.config.get('LOCALE', 'en')


def set_locale(locale: str) -> None:
    g.locale = locale


def get_fallback_locale() -> str | None:
    """Return the configured fallback locale, or None when unset."""
    return current_app.config.get('FALLBACK_LOCALE') or None


@contextmanager
def locale_override(locale: str):
    """Switch the current locale for the duration of the block."""
    previous = g.get('locale')
    set_locale(locale)
    try:
        yield locale
    finally:
        if previous is None:
            g.pop('locale', None)
        else:
            g.locale = previous


def negotiate_locale(request) -> str:
    """Pick the locale for a request and make it current.

    An explicit ``?locale=`` wins, then the best ``Accept-Language`` match
    among ``SUPPORTED_LOCALES``, then the configured default.
    """
    supported = current_app.config.get('SUPPORTED_LOCALES') or []
    locale = request.args.get('locale')
    if not locale and supported:
        locale = request.accept_languages.best_match(supported)
    locale = locale or current_app.config.get('LOCALE', 'en')
    set_locale(locale)
    return locale
