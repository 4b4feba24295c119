"""Errors raised by translatable models."""

from sqlalchemy.exc import SQLAlchemyError

# Storage failures are never wrapped; this alias only names them.
PersistenceError = SQLAlchemyError


class TranslatorError(Exception):
    """Base class for translator errors."""


class ConfigurationError(TranslatorError):
    """A translatable model is missing part of its declaration."""


class MassAssignmentError(TranslatorError):
    """An attribute was bulk-filled on a totally guarded model."""

    def __init__(self, key):
        super().__init__(f'Add [{key}] to __fillable__ to allow mass assignment.')
        self.key = key
