"""Article model with an explicitly declared translation model."""

from datetime import datetime
from translator import db
from translator.mixins import HasTranslations


class ArticleTranslation(db.Model):
    """Localized title and content of an article."""

    __tablename__ = 'article_translations'

    id = db.Column(db.Integer, primary_key=True)
    article_id = db.Column(db.Integer, db.ForeignKey('articles.id', ondelete='CASCADE'), nullable=False, index=True)
    locale = db.Column(db.String(16), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=True)
    content = db.Column(db.Text, nullable=True)

    # One row per article and locale
    __table_args__ = (
        db.UniqueConstraint('article_id', 'locale', name='unique_article_locale'),
    )

    def to_dict(self):
        """Convert translation to dictionary."""
        return {
            'id': self.id,
            'article_id': self.article_id,
            'locale': self.locale,
            'title': self.title,
            'content': self.content,
        }

    def __repr__(self):
        return f'<ArticleTranslation {self.article_id}:{self.locale}>'


class Article(HasTranslations, db.Model):
    """Article whose translations are only reached through ``translate()``."""

    __tablename__ = 'articles'
    __translatable__ = ('title', 'content')
    __translation_model__ = ArticleTranslation
    __fillable__ = ('title', 'content', 'thumbnail')

    id = db.Column(db.Integer, primary_key=True)
    thumbnail = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def to_dict(self):
        """Convert article and its current translation to dictionary."""
        translation = self.translate()
        return {
            'id': self.id,
            'thumbnail': self.thumbnail,
            'locale': translation.locale if translation else None,
            'title': translation.title if translation else None,
            'content': translation.content if translation else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self):
        return f'<Article {self.id}>'
