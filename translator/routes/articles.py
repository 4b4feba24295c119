"""Article routes using mass assignment and explicit translations."""

from flask import Blueprint, current_app, jsonify, request
from translator import db
from translator.exceptions import MassAssignmentError
from translator.models import Article

articles_bp = Blueprint('articles', __name__)


@articles_bp.route('/<int:article_id>', methods=['GET'])
def get_article(article_id):
    """Get an article in the request locale."""
    try:
        article = db.session.get(Article, article_id)
        if not article:
            return jsonify({'error': 'Article not found'}), 404

        return jsonify(article.to_dict()), 200
    except Exception as e:
        current_app.logger.error(f"Error fetching article {article_id}: {e}")
        return jsonify({'error': str(e)}), 500


@articles_bp.route('', methods=['POST'])
def create_article():
    """Create an article; translatable fields go to the request locale."""
    try:
        data = request.get_json() or {}

        if 'title' not in data:
            return jsonify({'error': 'Missing required fields'}), 400

        article = Article.create(data)

        return jsonify({
            'message': 'Article created successfully',
            'article': article.to_dict()
        }), 201
    except MassAssignmentError as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error creating article: {e}")
        return jsonify({'error': str(e)}), 500
