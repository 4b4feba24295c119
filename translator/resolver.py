"""Resolve the translation record that applies to a locale."""

import logging

from sqlalchemy import inspect
from sqlalchemy.orm import with_parent

from translator import db
from translator.locales import get_fallback_locale, get_locale, locale_override
from translator.store import describe

logger = logging.getLogger(__name__)


class TranslationResolver:
    """Translation lookup, fallback and lazy creation for one parent."""

    def __init__(self, parent, store):
        self.parent = parent
        self.store = store

    def translate(self, locale=None, fallback=True):
        """Return the translation for ``locale`` (default: current locale).

        With ``fallback`` a missing translation resolves to the fallback
        locale's record, which may itself be missing (None). Without it a
        missing translation resolves to an empty, unsaved record whose
        translatable attributes are all None.
        """
        locale = locale or get_locale()

        translation = self.store.get(locale)

        if translation is None and fallback:
            fallback_locale = get_fallback_locale()
            if fallback_locale and fallback_locale != locale:
                logger.debug(f"No {locale!r} translation for {describe(self.parent)}, trying {fallback_locale!r}")
                translation = self.store.get(fallback_locale)

        if translation is None and not fallback:
            translation = self.empty_translation(locale)

        return translation

    def translate_or_new(self, locale):
        """Return the record for ``locale``, constructing an unsaved one if needed.

        Rows missing from a locale-filtered collection are looked up first,
        so an existing row is never duplicated. A fully lazy-loaded
        collection already holds every row and is not queried again.
        """
        translation = self.store.get(locale)
        if translation is not None:
            return translation

        model = self.parent.get_translation_model()

        if inspect(self.parent).has_identity and not self.store.is_complete():
            with db.session.no_autoflush:
                translation = (
                    db.session.query(model)
                    .filter(with_parent(self.parent, type(self.parent).translations))
                    .filter(model.locale == locale)
                    .first()
                )

        if translation is None:
            translation = model(locale=locale)

        return self.store.put(locale, translation)

    def empty_translation(self, locale):
        """Build the placeholder record returned when no translation exists."""
        with locale_override(locale):
            translation = self.translate_or_new(locale)

            # A stored row hidden by a locale-filtered eager load is returned
            # as stored; only unsaved records get their attributes nulled.
            if inspect(translation).has_identity:
                return translation

            for attribute in self.parent.get_translatable():
                translation = self.parent.set_attribute(attribute, None)

        return translation
