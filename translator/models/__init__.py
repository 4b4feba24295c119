"""Database models for the translator application."""

from .country import Country
from .article import Article, ArticleTranslation

__all__ = ['Country', 'Article', 'ArticleTranslation']
