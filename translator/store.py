"""Per-instance cache of translation records keyed by locale."""

import logging

from sqlalchemy import inspect

from translator import db

logger = logging.getLogger(__name__)


def describe(instance):
    """Name a record by class and identity without loading attributes."""
    identity = inspect(instance).identity
    if identity is None:
        return f"new {type(instance).__name__}"
    return f"{type(instance).__name__}{identity}"


class TranslationStore:
    """Locale -> translation record cache for one parent instance.

    Lookups read the parent's ``translations`` collection, which is either
    already loaded (eager loading) or loaded once on first access. The store
    never creates records itself.
    """

    def __init__(self, parent):
        self.parent = parent
        self._cache = {}
        self._complete = None

    def get(self, locale):
        if not locale:
            return None

        if locale in self._cache:
            return self._cache[locale]

        # Reading the collection must not flush pending parent changes.
        with db.session.no_autoflush:
            lazy = 'translations' in inspect(self.parent).unloaded
            translations = self.parent.translations
            if lazy:
                self._complete = translations
            translation = next(
                (t for t in translations if t.locale == locale),
                None
            )

        if translation is not None:
            logger.debug(f"Cached {locale!r} translation for {describe(self.parent)}")
            self._cache[locale] = translation

        return translation

    def is_complete(self):
        """True when the loaded collection came from an unfiltered lazy load.

        Eager loads restricted to one locale leave it False, as does any
        reload that replaced the collection since.
        """
        current = inspect(self.parent).dict.get('translations')
        return self._complete is not None and current is self._complete

    def put(self, locale, translation):
        self._cache[locale] = translation
        return translation

    def all(self):
        return list(self._cache.values())

    def items(self):
        return list(self._cache.items())

    def locales(self):
        return list(self._cache)

    def clear(self):
        self._cache.clear()
        self._complete = None

    def __contains__(self, locale):
        return locale in self._cache

    def __len__(self):
        return len(self._cache)

    def __repr__(self):
        return f'<TranslationStore {self.locales()}>'
