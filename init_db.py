#!/usr/bin/env python
"""Database initialization script.

Creates the translations table (and any translatable models imported by the
host application) from the SQLAlchemy metadata. Prefer `flask db upgrade`
for databases that are already managed by migrations.

Usage:
    python init_db.py
"""

import os
import sys
from translatable import create_app, db


def init_database():
    """Initialize the database by creating all tables."""
    config_name = os.getenv('FLASK_ENV', 'development')
    app = create_app(config_name)

    print(f"\n{'='*60}")
    print(f"Database Initialization for {config_name.upper()} Environment")
    print(f"{'='*60}\n")

    with app.app_context():
        try:
            print(f"Database URI: {app.config['SQLALCHEMY_DATABASE_URI']}\n")

            db.create_all()

            print("Created tables:")
            for table_name in db.metadata.tables:
                print(f"  ✓ {table_name}")

            print("\n✅ Database initialization complete!\n")
            return True

        except Exception as e:
            print(f"❌ Error creating database: {e}\n")
            return False


if __name__ == '__main__':
    success = init_database()
    sys.exit(0 if success else 1)
