from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
import os
from dotenv import load_dotenv

load_dotenv()

db = SQLAlchemy()
migrate = Migrate()

MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'migrations')


def _database_url(config_name):
    if config_name == 'testing':
        return 'sqlite:///:memory:'
    url = os.getenv('DATABASE_URL', 'sqlite:///translatable.db')
    # Handle Render's postgres:// vs postgresql:// issue
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


def create_app(config_name='development'):
    app = Flask(__name__)

    # Config
    app.config['SQLALCHEMY_DATABASE_URI'] = _database_url(config_name)
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['TESTING'] = config_name == 'testing'

    # Locale used by plain attribute access, and the one substituted
    # for missing translations. An empty fallback disables substitution.
    app.config['APP_LOCALE'] = os.getenv('APP_LOCALE', 'en')
    app.config['APP_FALLBACK_LOCALE'] = os.getenv('APP_FALLBACK_LOCALE', 'en') or None

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db, directory=MIGRATIONS_DIR)

    # Register the translations table on the metadata
    from translatable import models  # noqa: F401

    return app
