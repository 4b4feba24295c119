"""Country routes serving names in the request locale."""

from flask import Blueprint, current_app, jsonify, request
from translator import db
from translator.locales import get_locale
from translator.models import Country

countries_bp = Blueprint('countries', __name__)


@countries_bp.route('', methods=['GET'])
def get_countries():
    """List countries with the request locale's translation eager loaded."""
    try:
        countries = Country.with_translations(get_locale()).order_by(Country.code).all()

        return jsonify({
            'countries': [country.to_dict() for country in countries],
            'locale': get_locale()
        }), 200
    except Exception as e:
        current_app.logger.error(f"Error listing countries: {e}")
        return jsonify({'error': str(e)}), 500


@countries_bp.route('/<code>', methods=['GET'])
def get_country(code):
    """Get a country; ``?fallback=false`` disables the fallback locale."""
    try:
        country = db.session.get(Country, code.upper())
        if not country:
            return jsonify({'error': 'Country not found'}), 404

        fallback = request.args.get('fallback', 'true').lower() not in ('false', '0', 'no')
        translation = country.translate(get_locale(), fallback=fallback)

        return jsonify({
            'code': country.code,
            'name': translation.name if translation else None,
            'locale': translation.locale if translation else get_locale()
        }), 200
    except Exception as e:
        current_app.logger.error(f"Error fetching country {code}: {e}")
        return jsonify({'error': str(e)}), 500


@countries_bp.route('/<code>', methods=['PUT'])
def put_country(code):
    """Create or update a country's translation for the request locale."""
    try:
        data = request.get_json() or {}

        if 'name' not in data:
            return jsonify({'error': 'Missing required fields'}), 400

        country = db.session.get(Country, code.upper())
        created = country is None
        if created:
            country = Country(code=code.upper())

        country.name = data['name']
        country.save()

        return jsonify({
            'message': 'Country created successfully' if created else 'Country updated successfully',
            'country': country.to_dict()
        }), 201 if created else 200
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error saving country {code}: {e}")
        return jsonify({'error': str(e)}), 500


@countries_bp.route('/<code>/translations', methods=['GET'])
def get_country_translations(code):
    """List every stored translation of a country."""
    try:
        country = db.session.get(Country, code.upper())
        if not country:
            return jsonify({'error': 'Country not found'}), 404

        translations = sorted(country.translations, key=lambda t: t.locale)
        return jsonify({
            'translations': [translation.to_dict() for translation in translations]
        }), 200
    except Exception as e:
        current_app.logger.error(f"Error listing translations of {code}: {e}")
        return jsonify({'error': str(e)}), 500


@countries_bp.route('/<code>', methods=['DELETE'])
def delete_country(code):
    """Delete a country and, through the cascade, its translations."""
    try:
        country = db.session.get(Country, code.upper())
        if not country:
            return jsonify({'error': 'Country not found'}), 404

        country.delete()

        return jsonify({'message': 'Country deleted successfully'}), 200
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error deleting country {code}: {e}")
        return jsonify({'error': str(e)}), 500
