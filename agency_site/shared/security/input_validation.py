"""
Input validation and sanitization utilities.
Identifiers are checked against allow-list patterns before they reach a query.
"""

import os
import re
from typing import Any, Optional

from agency_site.shared.errors import InvalidFormat, OutOfBounds, UnsafeInput


# Maximum lengths for different input types
MAX_SLUG_LENGTH = 200
MAX_ID_LENGTH = 100

SLUG_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')
ID_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')
OBJECT_ID_PATTERN = re.compile(r'^[a-fA-F0-9]{24}$')


def sanitize_string_input(value: Any) -> str:
    """
    Strip a single leading '$' and reject query-operator characters.

    Raises:
        InvalidFormat if the value is not a string
        UnsafeInput if '$', '{' or '}' remain after the leading '$' is removed
    """
    if not isinstance(value, str):
        raise InvalidFormat("Invalid input type")

    sanitized = value[1:] if value.startswith("$") else value

    if "$" in sanitized or "{" in sanitized or "}" in sanitized:
        raise UnsafeInput("Invalid characters in input")

    return sanitized.strip()


def validate_slug(slug: Any) -> str:
    """
    Validate a blog post slug: lowercase alphanumeric groups joined by single hyphens.

    Returns:
        Normalized slug

    Raises:
        InvalidFormat if the slug is unsafe, malformed or longer than MAX_SLUG_LENGTH
    """
    sanitized = sanitize_string_input(slug)

    if not SLUG_PATTERN.match(sanitized):
        raise InvalidFormat("Invalid slug format")

    if len(sanitized) < 1 or len(sanitized) > MAX_SLUG_LENGTH:
        raise InvalidFormat("Slug length out of bounds")

    return sanitized


def validate_id(resource_id: Any) -> str:
    """Validate a project/resource ID (alphanumerics, hyphens and underscores)."""
    sanitized = sanitize_string_input(resource_id)

    if not ID_PATTERN.match(sanitized):
        raise InvalidFormat("Invalid ID format")

    if len(sanitized) < 1 or len(sanitized) > MAX_ID_LENGTH:
        raise InvalidFormat("ID length out of bounds")

    return sanitized


def validate_object_id(object_id: Any) -> str:
    """Validate an opaque 24-hex-character record identifier (back-office lookups)."""
    if not isinstance(object_id, str) or not OBJECT_ID_PATTERN.match(object_id):
        raise InvalidFormat("Invalid ObjectId format")
    return object_id.lower()


def validate_number(
    value: Any,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
    default: Optional[int] = None,
) -> int:
    """
    Parse an integer query parameter.

    Args:
        value: Raw value (string, int or None)
        min_value: Inclusive lower bound (None for no bound)
        max_value: Inclusive upper bound (None for no bound)
        default: Returned when the value cannot be parsed

    Raises:
        InvalidFormat if parsing fails and no default is configured
        OutOfBounds if the parsed number lies outside [min_value, max_value]
    """
    try:
        if isinstance(value, bool):
            raise ValueError("bool is not a number")
        num = int(value.strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError):
        if default is not None:
            return default
        raise InvalidFormat("Invalid number")

    if min_value is not None and num < min_value:
        raise OutOfBounds(f"Number must be at least {min_value}")

    if max_value is not None and num > max_value:
        raise OutOfBounds(f"Number must be at most {max_value}")

    return num


def truncate(value: Optional[str], max_length: int) -> Optional[str]:
    """Truncate header-derived metadata; empty values become None."""
    if not value:
        return None
    return value[:max_length]


def is_production() -> bool:
    return os.environ.get("APP_ENV", "development").lower() == "production"


def sanitize_error_message(error: Exception, default_message: str = "An error occurred") -> str:
    """Never expose exception text in production; show it elsewhere to ease debugging."""
    if is_production():
        return default_message
    return str(error) or default_message
