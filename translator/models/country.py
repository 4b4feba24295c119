"""Country model with a derived translations table."""

from translator import db
from translator.locales import get_locale
from translator.mixins import Translatable


class Country(Translatable, db.Model):
    """Country keyed by ISO code, with a localized name.

    The ``country_translations`` table and ``CountryTranslation`` class are
    derived from ``__translatable__``.
    """

    __tablename__ = 'countries'
    __translatable__ = ('name',)
    __translatable_columns__ = {'name': db.String(255)}

    code = db.Column(db.String(2), primary_key=True)

    def to_dict(self):
        """Convert country to dictionary."""
        translation = self.translate()
        return {
            'code': self.code,
            'name': translation.name if translation else None,
            'locale': translation.locale if translation else get_locale(),
        }

    def __repr__(self):
        return f'<Country {self.code}>'
