"""Mixin giving Flask-SQLAlchemy models per-locale attribute values.

A translatable model lists its translatable attributes in ``__translatable__``
and maps, for each of them, a text column under the attribute name prefixed
with an underscore::

    class Article(HasTranslations, db.Model):
        __translatable__ = ['title']

        id = db.Column(db.Integer, primary_key=True)
        _title = db.Column('title', db.Text)

The column holds every locale's value as a JSON object. ``article.title``
reads and writes the value for the current app locale, and each write made
through ``set_translation`` is mirrored into the ``translations`` table.
"""

import inspect
import json
import logging
from collections.abc import Mapping

from sqlalchemy import and_, inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declared_attr, foreign, remote

from translatable import db
from translatable.errors import UntranslatableAttributeError
from translatable.locale import get_locale, get_fallback_locale, resolve_locale
from translatable.models.translation import Translation

logger = logging.getLogger(__name__)

# Values a translation can hold, both in the JSON blob and the translations table
SCALAR_TYPES = (str, int, float, bool)


def raw_attribute_name(key):
    """Name of the mapped column attribute holding the JSON blob for ``key``."""
    return f'_{key}'


def translation_getter(key):
    """Register a method transforming the translated value of ``key`` on read.

    The method is called as ``method(self, value)`` and returns the value to surface.
    """
    def decorator(func):
        func.__translation_getter__ = key
        return func
    return decorator


def translation_setter(key):
    """Register a method transforming a value of ``key`` before it is stored.

    The method is called as ``method(self, value, locale)`` and returns the value to store.
    """
    def decorator(func):
        func.__translation_setter__ = key
        return func
    return decorator


def _collect_transforms(cls):
    getters = {}
    setters = {}
    # Walk from the base up so subclasses override their parents
    for base in reversed(cls.__mro__):
        for attr in vars(base).values():
            if not inspect.isfunction(attr):
                continue
            if hasattr(attr, '__translation_getter__'):
                getters[attr.__translation_getter__] = attr
            if hasattr(attr, '__translation_setter__'):
                setters[attr.__translation_setter__] = attr
    return getters, setters


class TranslatedAttribute:
    """Descriptor exposing a translatable attribute in the current app locale."""

    def __init__(self, key):
        self.key = key

    def __get__(self, instance, owner):
        if instance is None:
            # Class-level access gives the raw column, so it can be used in queries
            return getattr(owner, raw_attribute_name(self.key))
        return instance.get_attribute_value(self.key)

    def __set__(self, instance, value):
        instance.set_attribute(self.key, value)


class HasTranslations:
    """Store locale-specific values for the attributes listed in ``__translatable__``."""

    __translatable__ = []

    _translation_getters = {}
    _translation_setters = {}

    def __init_subclass__(cls, **kwargs):
        for key in cls.get_translatable_attributes():
            if not any(key in vars(base) for base in cls.__mro__):
                setattr(cls, key, TranslatedAttribute(key))
        cls._translation_getters, cls._translation_setters = _collect_transforms(cls)
        super().__init_subclass__(**kwargs)

    @declared_attr
    def translations(cls):
        return db.relationship(
            Translation,
            primaryjoin=lambda: and_(
                cls.id == foreign(remote(Translation.translatable_id)),
                Translation.translatable_type == cls.get_translatable_type(),
            ),
            cascade='all',
            order_by=Translation.id,
            overlaps='translations',
        )

    # Bumped on every UPDATE of the record; a concurrent change to the
    # inline blobs makes the second flush fail with StaleDataError.
    @declared_attr
    def translation_version(cls):
        return db.Column(db.Integer, nullable=False)

    @declared_attr
    def __mapper_args__(cls):
        return {'version_id_col': cls.translation_version}

    @classmethod
    def get_translatable_type(cls):
        """Owner type recorded on the translation rows.

        The table of the root mapped class, which owns the primary key shared
        by every class of an inheritance hierarchy.
        """
        return sa_inspect(cls).base_mapper.local_table.name

    @classmethod
    def get_translatable_attributes(cls):
        translatable = getattr(cls, '__translatable__', None)
        return translatable if isinstance(translatable, (list, tuple)) else []

    @classmethod
    def is_translatable_attribute(cls, key):
        return key in cls.get_translatable_attributes()

    def get_attribute_value(self, key):
        """Read ``key``, translated into the current app locale if translatable."""
        if not self.is_translatable_attribute(key):
            return getattr(self, key)

        return self.get_translation(key, get_locale())

    def set_attribute(self, key, value):
        """Assign ``key``.

        Plain attributes, and mappings assigned to translatable attributes, are
        stored as given without touching the translations table. A scalar value
        of a translatable attribute becomes its translation in the current app
        locale; other collections raise TypeError before anything is written.
        """
        if not self.is_translatable_attribute(key):
            setattr(self, key, value)
            return self

        if isinstance(value, Mapping):
            self._set_raw_attribute(key, self._as_json(value))
            return self

        return self.set_translation(key, get_locale(), value)

    def translate(self, key, locale=None):
        return self.get_translation(key, locale or get_locale())

    def get_translation(self, key, locale, use_fallback_locale=True):
        """Return the value of ``key`` in ``locale``, or '' when there is none.

        With ``use_fallback_locale`` a missing locale is replaced by the app's
        fallback locale. A getter registered for ``key`` is applied to the result.
        """
        translations = self.get_translations(key)

        locale = resolve_locale(locale, translations.keys(), use_fallback_locale, get_fallback_locale())

        translation = translations.get(locale, '')

        getter = self._translation_getters.get(key)
        if getter is not None:
            return getter(self, translation)

        return translation

    def get_translation_with_fallback(self, key, locale):
        return self.get_translation(key, locale, True)

    def get_translation_without_fallback(self, key, locale):
        return self.get_translation(key, locale, False)

    def get_translations(self, key):
        """Return every translation of ``key`` as a ``{locale: value}`` dict."""
        self._guard_against_untranslatable_attribute(key)

        return json.loads(self._get_raw_attribute(key) or '{}')

    def set_translation(self, key, locale, value):
        """Set the value of ``key`` in ``locale`` and mirror it to the translations table.

        A record without a primary key is saved first so the translation row
        has an owner to point at.
        """
        self._guard_against_untranslatable_attribute(key)

        translations = self.get_translations(key)

        setter = self._translation_setters.get(key)
        if setter is not None:
            value = setter(self, value, locale)

        self._guard_against_non_scalar_value(key, value)

        translations[locale] = value

        self._set_raw_attribute(key, self._as_json(translations))

        if self.id is None:
            logger.debug(f"Saving new {type(self).__name__} before storing its {key}/{locale} translation")
            self.save()

        Translation.update_or_create(self, key, locale, value)

        return self

    def set_translations(self, key, translations):
        """Set several locales of ``key`` at once. Not atomic across locales."""
        self._guard_against_untranslatable_attribute(key)

        for locale, translation in translations.items():
            self.set_translation(key, locale, translation)

        return self

    def forget_translation(self, key, locale, prune=False):
        """Remove ``locale`` from the stored translations of ``key``.

        The translation row is kept as history unless ``prune`` is set.
        """
        translations = self.get_translations(key)

        translations.pop(locale, None)

        self.set_attribute(key, translations)

        if prune and self.id is not None:
            translation = Translation.find(self, key, locale)
            if translation:
                db.session.delete(translation)
                db.session.flush()
                db.session.expire(self, ['translations'])
                logger.debug(f"Deleted translation row {self.get_translatable_type()}#{self.id} {key}/{locale}")

        return self

    def forget_all_translations(self, locale, prune=False):
        for attribute in self.get_translatable_attributes():
            self.forget_translation(attribute, locale, prune=prune)

        return self

    def get_translated_locales(self, key):
        return list(self.get_translations(key).keys())

    def translations_to_dict(self):
        """All translations of every translatable attribute, for serialization."""
        return {key: self.get_translations(key) for key in self.get_translatable_attributes()}

    def save(self):
        """Add the record to the session and commit it."""
        db.session.add(self)
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to save {type(self).__name__}: {e}")
            db.session.rollback()
            raise
        return self

    def _guard_against_untranslatable_attribute(self, key):
        if not self.is_translatable_attribute(key):
            raise UntranslatableAttributeError.make(key, self)

    def _guard_against_non_scalar_value(self, key, value):
        if value is not None and not isinstance(value, SCALAR_TYPES):
            raise TypeError(
                f"Cannot store a {type(value).__name__} as a translation of `{key}`; "
                f"assign a {{locale: value}} mapping to replace all translations"
            )

    def _get_raw_attribute(self, key):
        return getattr(self, raw_attribute_name(key))

    def _set_raw_attribute(self, key, value):
        setattr(self, raw_attribute_name(key), value)

    @staticmethod
    def _as_json(translations):
        return json.dumps(dict(translations), ensure_ascii=False)
