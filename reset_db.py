#!/usr/bin/env python
"""Rebuild the translations table for development.

Drops and recreates the shared translations table, discarding every mirrored
translation row. The JSON blobs stored on translatable records are left
alone, so the values stay readable; rows are written again by the next
set_translation of each (record, attribute, locale).

Usage:
    python reset_db.py [--yes]
"""

import logging
import os
import sys

from translatable import create_app, db
from translatable.models import Translation

logger = logging.getLogger(__name__)


def reset_translation_tables():
    """Drop and recreate the tables of translatable.models. Returns the number of rows removed."""
    removed = Translation.query.count()
    db.session.commit()

    tables = [Translation.__table__]
    db.metadata.drop_all(db.engine, tables=tables)
    db.metadata.create_all(db.engine, tables=tables)

    logger.info(f"Recreated {', '.join(t.name for t in tables)}; removed {removed} translation rows")
    return removed


def main(argv):
    if '--yes' not in argv:
        print("="*60)
        print("WARNING: This will DELETE ALL translation rows!")
        print("This should only be used in development.")
        print("="*60)

        confirm = input("Type 'yes' to confirm: ")
        if confirm.lower() != 'yes':
            print("Aborted.")
            return 0

    app = create_app(os.getenv('FLASK_ENV', 'development'))

    with app.app_context():
        removed = reset_translation_tables()

    print(f"\nTranslations table rebuilt, {removed} rows removed.")
    return 0


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    sys.exit(main(sys.argv[1:]))
