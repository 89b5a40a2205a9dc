"""Tests for locale resolution and bilingual lookups."""

from datetime import datetime
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from agency_site.shared.errors import LocaleNotFound
from agency_site.shared.i18n.locale import (
    BilingualText,
    Locale,
    get_default_locale,
    pick,
    related_by_category,
    resolve_locale,
)
from agency_site.shared.i18n.messages import message_for


def test_resolve_supported_locales():
    assert resolve_locale("id") == Locale.ID
    assert resolve_locale("en") == Locale.EN
    assert resolve_locale(Locale.EN) == Locale.EN


@pytest.mark.parametrize("requested", ["fr", "EN", "", None, "en-US", 1])
def test_resolve_unsupported_locale_fails_closed(requested):
    with pytest.raises(LocaleNotFound):
        resolve_locale(requested)


def test_default_locale_is_configurable(monkeypatch):
    monkeypatch.delenv("DEFAULT_LOCALE", raising=False)
    assert get_default_locale() == Locale.ID
    monkeypatch.setenv("DEFAULT_LOCALE", "en")
    assert get_default_locale() == Locale.EN
    monkeypatch.setenv("DEFAULT_LOCALE", "de")
    assert get_default_locale() == Locale.ID


def test_pick_from_model_and_stored_dict():
    text = BilingualText(id="Halo", en="Hello")
    assert pick(text, "id") == "Halo"
    assert pick(text, Locale.EN) == "Hello"
    assert pick({"id": "Halo", "en": "Hello"}, "en") == "Hello"
    with pytest.raises(LocaleNotFound):
        pick(text, "fr")


def test_bilingual_text_requires_both_locales():
    with pytest.raises(ValidationError):
        BilingualText(id="Halo", en="")
    with pytest.raises(ValidationError):
        BilingualText(id="Halo")


def record(key, category_en, day):
    return SimpleNamespace(
        id=key,
        category={"id": f"{category_en} (id)", "en": category_en},
        date=datetime(2024, 1, day),
    )


def test_related_by_category_filters_sorts_and_limits():
    records = [
        record("a", "Web", 1),
        record("b", "Web", 5),
        record("current", "Web", 9),
        record("c", "Mobile", 7),
        record("d", "Web", 3),
    ]
    current = records[2]
    related = related_by_category(records, "current", current.category, "en", 2)
    assert [r.id for r in related] == ["b", "d"]


def test_related_by_category_matches_in_requested_locale():
    records = [record("a", "Web", 1), record("b", "Web", 2)]
    category = {"id": "Web (id)", "en": "Something else"}
    assert [r.id for r in related_by_category(records, None, category, "id", 5)] == ["b", "a"]
    assert related_by_category(records, None, category, "en", 5) == []


def test_related_by_category_keeps_stored_order_on_ties():
    records = [record("first", "Web", 4), record("second", "Web", 4), record("third", "Web", 4)]
    related = related_by_category(records, None, records[0].category, "en", 3)
    assert [r.id for r in related] == ["first", "second", "third"]


def test_message_for_falls_back_to_default_locale(monkeypatch):
    monkeypatch.delenv("DEFAULT_LOCALE", raising=False)
    assert message_for("too_many_requests", "en") == "Too many requests. Please try again later."
    assert message_for("too_many_requests", "fr") == "Terlalu banyak permintaan. Silakan coba lagi nanti."
