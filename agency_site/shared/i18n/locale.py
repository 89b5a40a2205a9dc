"""Locale resolution and bilingual content lookup."""

import logging
import os
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional

from pydantic import BaseModel, Field

from agency_site.shared.errors import LocaleNotFound


class Locale(str, Enum):
    """Supported locales."""
    ID = "id"  # Indonesian
    EN = "en"  # English


SUPPORTED_LOCALES = (Locale.ID.value, Locale.EN.value)
FALLBACK_DEFAULT_LOCALE = Locale.ID


class BilingualText(BaseModel):
    """A text value carrying both locale variants."""
    id: str = Field(..., min_length=1)
    en: str = Field(..., min_length=1)


def resolve_locale(requested: Any) -> Locale:
    """
    Map a requested locale segment to a supported Locale.

    Raises:
        LocaleNotFound for anything outside {id, en}; callers turn this into a 404
    """
    if isinstance(requested, Locale):
        return requested
    if not isinstance(requested, str) or requested not in SUPPORTED_LOCALES:
        raise LocaleNotFound(requested)
    return Locale(requested)


def get_default_locale() -> Locale:
    """Canonical redirect target for the unprefixed root path (DEFAULT_LOCALE)."""
    configured = os.environ.get("DEFAULT_LOCALE", FALLBACK_DEFAULT_LOCALE.value)
    try:
        return resolve_locale(configured.strip().lower())
    except LocaleNotFound:
        logging.warning(f"DEFAULT_LOCALE={configured!r} is not supported, using '{FALLBACK_DEFAULT_LOCALE.value}'")
        return FALLBACK_DEFAULT_LOCALE


def pick(text: Any, locale: Any) -> str:
    """Return the variant of a bilingual value (model or stored dict) for a locale."""
    key = resolve_locale(locale).value
    if isinstance(text, BilingualText):
        return getattr(text, key)
    return text[key]


def related_by_category(
    records: Iterable[Any],
    exclude_key: Optional[str],
    category_text: Any,
    locale: Any,
    limit: int,
    key: Callable[[Any], Any] = lambda record: record.id,
    date: Callable[[Any], Any] = lambda record: record.date,
    category: Callable[[Any], Any] = lambda record: record.category,
) -> List[Any]:
    """
    Records sharing the category (in the given locale), newest first.

    The record whose key equals exclude_key is skipped. Python's sort is stable,
    so records with equal dates keep their stored order.
    """
    wanted = pick(category_text, locale)
    matches = [
        record for record in records
        if key(record) != exclude_key and pick(category(record), locale) == wanted
    ]
    matches.sort(key=date, reverse=True)
    return matches[:max(limit, 0)]
