"""Locale lookup and fallback resolution."""

from flask import current_app


def get_locale():
    """Locale used for plain attribute reads and writes."""
    return current_app.config['APP_LOCALE']


def get_fallback_locale():
    """Locale substituted for missing translations, or None when disabled."""
    return current_app.config.get('APP_FALLBACK_LOCALE')


def resolve_locale(locale, translated_locales, use_fallback_locale, fallback_locale):
    """Pick the locale whose value should be read.

    An exact match always wins. Otherwise, when fallback is enabled and a
    fallback locale is configured, the fallback is returned even if it has
    no translation of its own.
    """
    if locale in translated_locales:
        return locale

    if not use_fallback_locale:
        return locale

    if fallback_locale is not None:
        return fallback_locale

    return locale
