"""Translation model derivation.

A parent that only lists ``__translatable__`` gets its translation table and
mapped class built once, when its own mapper is constructed::

    class Country(Translatable, db.Model):
        __tablename__ = 'countries'
        __translatable__ = ('name',)

        code = db.Column(db.String(2), primary_key=True)

produces ``country_translations(id, country_code, locale, name)`` mapped to
``CountryTranslation`` and a ``Country.translations`` relationship.
"""

import logging
import re

from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
    inspect,
)
from sqlalchemy.orm import relationship

from translator.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

LOCALE_LENGTH = 16


def snake_case(name):
    """``ArticleTranslation`` -> ``article_translation``."""
    name = re.sub(r'((?<=[a-z0-9])[A-Z]|(?!^)[A-Z](?=[a-z]))', r'_\1', name)
    return name.lower()


class TranslationRecord:
    """Base class of derived translation models."""

    def __init__(self, **kwargs):
        for key, value in kwargs.items():
            if not hasattr(type(self), key):
                raise TypeError(f'{key!r} is an invalid keyword argument for {type(self).__name__}')
            setattr(self, key, value)

    def to_dict(self):
        """Convert translation to dictionary."""
        return {
            attr.key: getattr(self, attr.key)
            for attr in inspect(type(self)).column_attrs
        }

    def __repr__(self):
        return f'<{type(self).__name__} {self.locale}>'


def translations_table_name(cls):
    return getattr(cls, '__translations_table__', None) or f'{snake_case(cls.__name__)}_translations'


def derive_translation_model(mapper):
    """Build and map the translation class described by a parent mapper."""
    cls = mapper.class_
    primary_key = list(mapper.local_table.primary_key.columns)
    if len(primary_key) != 1:
        raise ConfigurationError(
            f'{cls.__name__} needs a single-column primary key to derive its translations table.'
        )
    parent_key = primary_key[0]

    table_name = translations_table_name(cls)
    foreign_key = (
        getattr(cls, '__translation_foreign_key__', None)
        or f'{snake_case(cls.__name__)}_{parent_key.name}'
    )
    column_types = getattr(cls, '__translatable_columns__', None) or {}

    table = Table(
        table_name,
        mapper.local_table.metadata,
        Column('id', Integer, primary_key=True),
        Column(
            foreign_key,
            parent_key.type,
            ForeignKey(parent_key, ondelete='CASCADE'),
            nullable=False,
            index=True,
        ),
        Column('locale', String(LOCALE_LENGTH), nullable=False, index=True),
        *[
            Column(attribute, column_types.get(attribute, Text), nullable=True)
            for attribute in cls.__translatable__
        ],
        UniqueConstraint(foreign_key, 'locale', name=f'uq_{table_name}_locale'),
    )

    model = type(
        f'{cls.__name__}Translation',
        (TranslationRecord,),
        {'__module__': cls.__module__},
    )
    mapper.registry.map_imperatively(model, table)
    logger.debug(f"Derived {model.__name__} on table {table_name!r}")
    return model


def configure_translations(mapper, cls):
    """Give a parent mapper its ``translations`` relationship.

    Parents declaring their own relationship are left alone. Parents with
    neither ``__translation_model__`` nor ``__translatable__`` stay
    unconfigured; using them raises ConfigurationError.
    """
    if mapper.has_property('translations'):
        return

    model = getattr(cls, '__translation_model__', None)
    if model is None:
        if getattr(cls, '__translatable__', None) is None:
            return
        model = derive_translation_model(mapper)
        cls.__translation_model__ = model

    mapper.add_property(
        'translations',
        relationship(
            model,
            lazy='select',
            cascade='all, delete-orphan',
            passive_deletes=True,
        ),
    )
