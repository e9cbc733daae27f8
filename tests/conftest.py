"""
Pytest configuration and fixtures for the translatable mixin tests.
"""

import os
import sys
import pytest
from faker import Faker

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from translatable import create_app, db
from tests.models import Article, Page, Product

fake = Faker()


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app('testing')
    app.config['APP_LOCALE'] = 'en'
    app.config['APP_FALLBACK_LOCALE'] = 'en'

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def db_session(app):
    """Create a fresh database session for each test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        yield db.session
        db.session.rollback()


@pytest.fixture
def locale(app, monkeypatch):
    """Switch the current app locale for the duration of a test."""
    def set_locale(value):
        monkeypatch.setitem(app.config, 'APP_LOCALE', value)
    return set_locale


@pytest.fixture
def fallback_locale(app, monkeypatch):
    """Switch the fallback locale for the duration of a test."""
    def set_fallback(value):
        monkeypatch.setitem(app.config, 'APP_FALLBACK_LOCALE', value)
    return set_fallback


@pytest.fixture
def article(db_session):
    """A saved article without translations."""
    article = Article(slug=fake.slug())
    db_session.add(article)
    db_session.commit()
    return article


@pytest.fixture
def page(db_session):
    """A saved page without translations."""
    page = Page()
    db_session.add(page)
    db_session.commit()
    return page


@pytest.fixture
def product(db_session):
    """A saved product without translations."""
    product = Product()
    db_session.add(product)
    db_session.commit()
    return product
