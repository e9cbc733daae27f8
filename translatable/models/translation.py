"""Translation model: one row per (owner, attribute, locale)."""

import logging
from datetime import datetime
from translatable import db

logger = logging.getLogger(__name__)


class Translation(db.Model):
    """Satellite row mirroring a single translated value of any translatable model."""

    __tablename__ = 'translations'

    id = db.Column(db.Integer, primary_key=True)

    # Owner reference, shared by every translatable model.
    # translatable_type is the owner's table name.
    translatable_type = db.Column(db.String(100), nullable=False)
    translatable_id = db.Column(db.Integer, nullable=False)

    key = db.Column(db.String(100), nullable=False)
    locale = db.Column(db.String(20), nullable=False)
    value = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint('translatable_type', 'translatable_id', 'key', 'locale',
                            name='unique_translation_key_locale'),
        db.Index('ix_translations_owner', 'translatable_type', 'translatable_id'),
    )

    def to_dict(self):
        """Convert translation to dictionary."""
        return {
            'id': self.id,
            'translatable_type': self.translatable_type,
            'translatable_id': self.translatable_id,
            'key': self.key,
            'locale': self.locale,
            'value': self.value,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }

    @classmethod
    def for_owner(cls, owner):
        """Query all rows belonging to an owner record."""
        return cls.query.filter_by(
            translatable_type=owner.get_translatable_type(),
            translatable_id=owner.id
        )

    @classmethod
    def find(cls, owner, key, locale):
        """Return the row for (owner, key, locale), or None."""
        return cls.for_owner(owner).filter_by(key=key, locale=locale).first()

    @classmethod
    def update_or_create(cls, owner, key, locale, value):
        """Upsert the row identified by (owner, key, locale). Returns the row.

        The row is flushed but not committed; the caller's transaction owns it.
        """
        translation = cls.find(owner, key, locale)

        if translation:
            translation.value = value
            logger.debug(f"Updated translation {owner.get_translatable_type()}#{owner.id} {key}/{locale}")
        else:
            translation = cls(
                translatable_type=owner.get_translatable_type(),
                translatable_id=owner.id,
                key=key,
                locale=locale,
                value=value
            )
            owner.translations.append(translation)
            logger.debug(f"Created translation {owner.get_translatable_type()}#{owner.id} {key}/{locale}")

        db.session.flush()
        return translation

    def __repr__(self):
        return f'<Translation {self.translatable_type}#{self.translatable_id} {self.key}/{self.locale}>'
