"""Write cached translations alongside their parent."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import with_parent

from translator import db
from translator.store import describe

logger = logging.getLogger(__name__)


def persist_translations(parent, store):
    """Attach every cached translation to the parent's relation.

    The parent must already be flushed; the relation sets the foreign key and
    the session inserts new rows or updates existing ones on the next flush.
    """
    translations = store.all()
    with db.session.no_autoflush:
        for translation in translations:
            if translation not in parent.translations:
                parent.translations.append(translation)
    db.session.add_all(translations)
    return translations


def save(parent, store, commit=True):
    """Save ``parent`` then its cached translations.

    Storage errors roll the session back and propagate unchanged.
    """
    try:
        db.session.add(parent)
        db.session.flush()

        translations = persist_translations(parent, store)

        if commit:
            db.session.commit()
        else:
            db.session.flush()
    except SQLAlchemyError as e:
        logger.error(f"Failed to save {describe(parent)}: {e}")
        db.session.rollback()
        raise

    if translations:
        logger.info(f"Saved {len(translations)} translation(s) for {describe(parent)}")
    return True


def delete(parent, commit=True):
    """Delete ``parent``; the foreign key cascade removes its translations."""
    try:
        db.session.delete(parent)
        if commit:
            db.session.commit()
        else:
            db.session.flush()
    except SQLAlchemyError as e:
        logger.error(f"Failed to delete {describe(parent)}: {e}")
        db.session.rollback()
        raise
    return True


def delete_translations(parent, store, commit=True):
    """Delete every translation row of ``parent``, keeping the parent row."""
    model = parent.get_translation_model()
    try:
        count = (
            db.session.query(model)
            .filter(with_parent(parent, type(parent).translations))
            .delete(synchronize_session='fetch')
        )
        if commit:
            db.session.commit()
        else:
            db.session.flush()
    except SQLAlchemyError as e:
        logger.error(f"Failed to delete translations of {describe(parent)}: {e}")
        db.session.rollback()
        raise

    store.clear()
    db.session.expire(parent, ['translations'])
    logger.info(f"Deleted {count} translation(s) of {describe(parent)}")
    return count
