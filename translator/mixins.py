"""Model mixins routing translatable attributes to per-locale rows.

``HasTranslations`` is the explicit profile: translations are reached through
``translate()``, ``get_attribute()`` and ``set_attribute()``.
``Translatable`` additionally turns every name in ``__translatable__`` into a
class attribute, so ``country.name`` reads the current locale's row.
"""

from contextlib import contextmanager

from sqlalchemy import event, inspect
from sqlalchemy.exc import InvalidRequestError
from sqlalchemy.orm import selectinload

from translator import dirty, persistence
from translator.exceptions import ConfigurationError, MassAssignmentError
from translator.locales import get_locale
from translator.resolver import TranslationResolver
from translator.schema import configure_translations
from translator.store import TranslationStore


class HasTranslations:
    """Translation support for a Flask-SQLAlchemy model.

    Declare ``__translatable__`` and either let the translation model be
    derived, point ``__translation_model__`` at a mapped class, or declare a
    ``translations`` relationship yourself.
    """

    __fillable__ = ()
    __guarded__ = ('*',)

    _unguarded = False

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        mapper = inspect(cls, raiseerr=False)
        if mapper is not None:
            configure_translations(mapper, cls)
        else:
            @event.listens_for(cls, 'after_mapper_constructed')
            def _mapper_constructed(mapper, class_):
                configure_translations(mapper, class_)

    # Declaration

    @classmethod
    def get_translatable(cls):
        translatable = getattr(cls, '__translatable__', None)
        if translatable is None:
            raise ConfigurationError(f'Missing property [__translatable__] on {cls.__name__}.')
        return tuple(translatable)

    @classmethod
    def get_translation_model(cls):
        mapper = inspect(cls, raiseerr=False)
        if mapper is None or not mapper.has_property('translations'):
            raise ConfigurationError(
                f'{cls.__name__} has no translation model; declare __translatable__ '
                f'or __translation_model__.'
            )
        try:
            return mapper.attrs['translations'].mapper.class_
        except InvalidRequestError as e:
            raise ConfigurationError(f'Cannot resolve the translation model of {cls.__name__}: {e}') from e

    @classmethod
    def get_translations_table(cls):
        return inspect(cls.get_translation_model()).local_table.name

    @classmethod
    def with_translations(cls, locale=None):
        """Query that eager loads only the ``locale`` translation of each row."""
        locale = locale or get_locale()
        model = cls.get_translation_model()
        return cls.query.options(
            selectinload(cls.translations.and_(model.locale == locale))
        )

    # Resolution

    @property
    def translation_store(self):
        store = self.__dict__.get('_translation_store')
        if store is None:
            store = TranslationStore(self)
            self.__dict__['_translation_store'] = store
        return store

    @property
    def translation_resolver(self):
        return TranslationResolver(self, self.translation_store)

    def translate(self, locale=None, fallback=True):
        return self.translation_resolver.translate(locale, fallback)

    def translate_or_new(self, locale):
        return self.translation_resolver.translate_or_new(locale)

    # Attribute access

    def get_attribute(self, key):
        if key in self.get_translatable():
            translation = self.translate()
            return getattr(translation, key) if translation is not None else None

        return getattr(self, key)

    def set_attribute(self, key, value):
        """Assign ``key``; translatable keys return the translation record."""
        if key in self.get_translatable():
            locale = get_locale()
            translation = self.translate_or_new(locale)
            setattr(translation, key, value)
            return self.translation_store.put(locale, translation)

        if not hasattr(type(self), key):
            raise AttributeError(f'{type(self).__name__} has no attribute {key!r}')
        setattr(self, key, value)
        return self

    def to_dict(self):
        """Convert the record and its current translation to a dictionary."""
        data = {
            attr.key: getattr(self, attr.key)
            for attr in inspect(type(self)).column_attrs
        }
        for attribute in self.get_translatable():
            data[attribute] = self.get_attribute(attribute)
        return data

    # Change tracking

    def get_dirty(self):
        return dirty.changed_attributes(self)

    def get_dirty_translations(self):
        return dirty.dirty_translations(self.translation_store)

    def get_dirty_translations_by_locale(self):
        return dirty.dirty_translations_by_locale(self.translation_store)

    def is_dirty(self, *attributes):
        if len(attributes) == 1 and isinstance(attributes[0], (list, tuple, set)):
            attributes = tuple(attributes[0])
        return dirty.is_dirty(self, self.translation_store, attributes)

    # Persistence

    def save(self, commit=True):
        return persistence.save(self, self.translation_store, commit=commit)

    def delete(self, commit=True):
        return persistence.delete(self, commit=commit)

    def delete_translations(self, commit=True):
        return persistence.delete_translations(self, self.translation_store, commit=commit)

    # Mass assignment

    @classmethod
    def totally_guarded(cls):
        return not cls.__fillable__ and tuple(cls.__guarded__) == ('*',)

    @classmethod
    def is_fillable(cls, key):
        if HasTranslations._unguarded or key in cls.__fillable__:
            return True
        if cls.totally_guarded():
            return False
        return not cls.__fillable__ and key not in cls.__guarded__ and not key.startswith('_')

    @classmethod
    @contextmanager
    def unguarded(cls):
        """Disable mass-assignment protection inside the block."""
        previous = HasTranslations._unguarded
        HasTranslations._unguarded = True
        try:
            yield
        finally:
            HasTranslations._unguarded = previous

    def fill(self, attributes):
        totally_guarded = self.totally_guarded()

        for key, value in attributes.items():
            if self.is_fillable(key):
                self.set_attribute(key, value)
            elif totally_guarded:
                raise MassAssignmentError(key)

        return self

    @classmethod
    def create(cls, attributes=None, commit=True):
        instance = cls()
        instance.fill(attributes or {})
        instance.save(commit=commit)
        return instance

    def update(self, attributes=None, commit=True):
        self.fill(attributes or {})
        return self.save(commit=commit)


class TranslatedAttribute:
    """Class attribute forwarding one translatable name to the proxy."""

    def __init__(self, key):
        self.key = key

    def __get__(self, instance, owner):
        if instance is None:
            return self
        return instance.get_attribute(self.key)

    def __set__(self, instance, value):
        instance.set_attribute(self.key, value)

    def __repr__(self):
        return f'<TranslatedAttribute {self.key}>'


class Translatable(HasTranslations):
    """Transparent profile: translatable names read and write like columns."""

    def __init_subclass__(cls, **kwargs):
        for key in cls.__dict__.get('__translatable__', ()):
            setattr(cls, key, TranslatedAttribute(key))
        super().__init_subclass__(**kwargs)
