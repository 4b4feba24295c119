"""Change detection across a parent and its cached translations."""

from sqlalchemy import inspect


def changed_attributes(instance):
    """Column attributes of ``instance`` modified since the last sync.

    A value counts as changed when the record never had it persisted, or when
    it differs from the persisted value by the column type's own comparison.
    Unloaded attributes are not fetched.
    """
    state = inspect(instance)
    dirty = {}
    for attr in state.mapper.column_attrs:
        if state.attrs[attr.key].history.has_changes():
            dirty[attr.key] = state.dict.get(attr.key)
    return dirty


def dirty_translations(store):
    """Flat field -> value mapping of every cached translation's changes.

    Locales are walked in cache order, so when two locales change the same
    field the later one wins.
    """
    dirty = {}
    for translation in store.all():
        dirty.update(changed_attributes(translation))
    return dirty


def dirty_translations_by_locale(store):
    dirty = {}
    for locale, translation in store.items():
        changes = changed_attributes(translation)
        if changes:
            dirty[locale] = changes
    return dirty


def is_dirty(instance, store, attributes=()):
    dirty = {**changed_attributes(instance), **dirty_translations(store)}

    if not attributes:
        return len(dirty) > 0

    return any(attribute in dirty for attribute in attributes)
