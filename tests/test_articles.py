"""
Tests for the explicit translation profile on the Article model.
"""

import pytest
from faker import Faker

from translator import db
from translator.exceptions import MassAssignmentError
from translator.locales import set_locale
from translator.models import Article, ArticleTranslation, Country

fake = Faker()


class TestArticleTranslations:
    """Tests for Article.translate() and explicit attribute access"""

    def test_translation_model(self, seeded):
        assert Article.get_translation_model() is ArticleTranslation
        assert Article.get_translations_table() == 'article_translations'

    def test_translate(self, seeded):
        article = db.session.get(Article, 1)

        assert article.translate('en').title == 'Use the force Harry'
        assert article.translate('sv').title == 'Använd kraften Harry'
        assert article.translate().title == 'Använd kraften Harry'

    def test_get_attribute(self, seeded):
        article = db.session.get(Article, 1)

        assert article.get_attribute('title') == 'Använd kraften Harry'
        assert article.get_attribute('content') is None
        assert article.get_attribute('thumbnail') == 'http://i.imgur.com/tyfwfEX.jpg'

    def test_attributes_are_not_proxied(self, seeded):
        article = db.session.get(Article, 1)

        with pytest.raises(AttributeError):
            article.title

    def test_set_attribute(self, seeded):
        set_locale('en')
        article = db.session.get(Article, 1)

        translation = article.set_attribute('title', "I'm your father Hagrid")

        assert isinstance(translation, ArticleTranslation)
        assert article.translate().title == "I'm your father Hagrid"
        assert article.translate('sv').title == 'Använd kraften Harry'
        assert article.get_dirty_translations() == {'title': "I'm your father Hagrid"}

    def test_fallback(self, seeded):
        article = db.session.get(Article, 1)

        assert article.translate('de').title == 'Use the force Harry'
        assert article.translate('de', False).title is None
        assert article.translate('de', False).content is None

    def test_to_dict(self, seeded):
        set_locale('en')
        article = db.session.get(Article, 1)

        data = article.to_dict()

        assert data['id'] == 1
        assert data['locale'] == 'en'
        assert data['title'] == 'Use the force Harry'


class TestMassAssignment:
    """Tests for fill(), create() and guarded attributes"""

    def test_create(self, seeded):
        set_locale('en')
        title = fake.sentence(nb_words=4)

        article = Article.create({'title': title, 'thumbnail': 'http://i.imgur.com/tyfwfEX.jpg'})

        row = ArticleTranslation.query.filter_by(article_id=article.id, locale='en').one()
        assert row.title == title
        assert db.session.get(Article, article.id).thumbnail == 'http://i.imgur.com/tyfwfEX.jpg'

    def test_create_in_current_locale(self, seeded):
        set_locale('de')
        content = fake.paragraph()

        article = Article.create({'title': 'Whoa. Das ist schwer.', 'content': content})

        row = ArticleTranslation.query.filter_by(article_id=article.id, locale='de').one()
        assert row.title == 'Whoa. Das ist schwer.'
        assert row.content == content

    def test_fill_skips_attributes_outside_fillable(self, seeded):
        article = db.session.get(Article, 1)

        article.fill({'id': 99, 'title': 'Ny titel'})

        assert article.id == 1
        assert article.translate().title == 'Ny titel'

    def test_totally_guarded_model_rejects_fill(self, db_session):
        assert Country.totally_guarded()
        assert not Article.totally_guarded()

        with pytest.raises(MassAssignmentError) as excinfo:
            Country().fill({'code': 'FI', 'name': 'Finland'})

        assert excinfo.value.key == 'code'

    def test_unguarded(self, db_session):
        with Country.unguarded():
            country = Country().fill({'code': 'FI', 'name': 'Suomi'})

        assert country.code == 'FI'
        assert country.name == 'Suomi'
        assert not Country.is_fillable('code')

    def test_update(self, seeded):
        article = db.session.get(Article, 1)

        article.update({'title': 'Whoa. Detta är tung.'})

        row = ArticleTranslation.query.filter_by(article_id=1, locale='sv').one()
        assert row.title == 'Whoa. Detta är tung.'
        assert ArticleTranslation.query.filter_by(article_id=1).count() == 2


class TestArticleDeletion:
    """Tests for deleting articles and their translations"""

    def test_delete_translations(self, seeded):
        db.session.get(Article, 1).delete_translations()

        assert Article.query.count() == 1
        assert ArticleTranslation.query.count() == 0

    def test_delete_parent(self, seeded):
        db.session.get(Article, 1).delete()

        assert Article.query.count() == 0
        assert ArticleTranslation.query.count() == 0
