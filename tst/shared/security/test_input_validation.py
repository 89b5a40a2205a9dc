"""Tests for identifier and query parameter validation."""

import pytest

from agency_site.shared.errors import InvalidFormat, InvalidInput, OutOfBounds, UnsafeInput
from agency_site.shared.security.input_validation import (
    sanitize_error_message,
    truncate,
    validate_id,
    validate_number,
    validate_object_id,
    validate_slug,
)


@pytest.mark.parametrize("slug", ["post", "my-first-post", "2024-review", "a1-b2-c3"])
def test_validate_slug_accepts_valid_slugs(slug):
    assert validate_slug(slug) == slug


@pytest.mark.parametrize("slug", ["my-first-post", "a", "x" * 200])
def test_validate_slug_is_idempotent(slug):
    assert validate_slug(validate_slug(slug)) == validate_slug(slug)


def test_validate_slug_strips_single_leading_dollar_and_whitespace():
    assert validate_slug("$my-post") == "my-post"
    assert validate_slug("  my-post  ") == "my-post"


@pytest.mark.parametrize("slug", ["my$post", "$$post", "{post}", "post}", "{\"$gt\": \"\"}"])
def test_validate_slug_rejects_operator_characters(slug):
    with pytest.raises(InvalidFormat):
        validate_slug(slug)


@pytest.mark.parametrize("slug", ["My-Post", "my--post", "-post", "post-", "my_post", "my post", "", "x" * 201])
def test_validate_slug_rejects_malformed_slugs(slug):
    with pytest.raises(InvalidFormat):
        validate_slug(slug)


def test_validate_slug_rejects_non_strings():
    with pytest.raises(InvalidFormat):
        validate_slug({"$ne": None})


def test_unsafe_input_is_an_invalid_format():
    with pytest.raises(UnsafeInput):
        validate_id("abc{")
    assert issubclass(UnsafeInput, InvalidFormat)
    assert issubclass(InvalidFormat, InvalidInput)


@pytest.mark.parametrize("resource_id", ["shop-platform", "Project_42", "a", "x" * 100])
def test_validate_id_accepts_valid_ids(resource_id):
    assert validate_id(resource_id) == resource_id


@pytest.mark.parametrize("resource_id", ["../../etc/passwd", "a.b", "a/b", "a b", "", "x" * 101, "id}", "a$b"])
def test_validate_id_rejects_invalid_ids(resource_id):
    with pytest.raises(InvalidFormat):
        validate_id(resource_id)


def test_validate_object_id():
    assert validate_object_id("507f1f77bcf86cd799439011") == "507f1f77bcf86cd799439011"
    assert validate_object_id("507F1F77BCF86CD799439011") == "507f1f77bcf86cd799439011"
    for bad in ["507f1f77bcf86cd79943901", "507f1f77bcf86cd79943901g", "", None, 12]:
        with pytest.raises(InvalidFormat):
            validate_object_id(bad)


def test_validate_number_parses_and_bounds():
    assert validate_number("5", 1, 10) == 5
    assert validate_number(" 7 ", 1, 10) == 7
    assert validate_number(3, 1, 10) == 3


def test_validate_number_uses_default_when_unparseable():
    assert validate_number("abc", 1, 10, default=4) == 4
    assert validate_number(None, 1, 10, default=4) == 4


def test_validate_number_without_default_fails_on_garbage():
    with pytest.raises(InvalidFormat):
        validate_number("abc")
    with pytest.raises(InvalidFormat):
        validate_number(None)


def test_validate_number_out_of_bounds():
    with pytest.raises(OutOfBounds):
        validate_number("0", 1, 10, default=4)
    with pytest.raises(OutOfBounds):
        validate_number("11", 1, 10)


def test_sanitize_error_message_hides_detail_in_production(monkeypatch):
    error = RuntimeError("connection refused on 10.0.0.5:5432")
    monkeypatch.setenv("APP_ENV", "production")
    assert sanitize_error_message(error, "Failed") == "Failed"
    monkeypatch.setenv("APP_ENV", "development")
    assert sanitize_error_message(error, "Failed") == "connection refused on 10.0.0.5:5432"


def test_truncate():
    assert truncate("abcdef", 3) == "abc"
    assert truncate("", 3) is None
    assert truncate(None, 3) is None
