"""Error taxonomy shared by validators, the contact pipeline and the routes."""

from typing import List, Dict


class InvalidInput(Exception):
    """Malformed or unsafe externally supplied identifier."""


class InvalidFormat(InvalidInput):
    """Value does not match the allowed pattern or cannot be parsed."""


class UnsafeInput(InvalidFormat):
    """Value carries query-operator characters ($, {, })."""


class OutOfBounds(InvalidInput):
    """Parsed number lies outside the configured range."""


class ValidationFailed(Exception):
    """One or more contact form rules were violated."""

    def __init__(self, details: List[Dict[str, str]]):
        self.details = details
        super().__init__(f"{len(details)} field(s) failed validation")


class RateLimited(Exception):
    """Too many attempts from one client address within the window."""


class ChallengeFailed(Exception):
    """Arithmetic challenge answer missing, expired or wrong."""


class BotSuspected(Exception):
    """Decoy field was filled in. Never surfaced distinctly to the caller."""


class StorageUnavailable(Exception):
    """The content store could not complete the write."""


class LocaleNotFound(Exception):
    """Requested locale is not one of the supported locales."""

    def __init__(self, requested):
        self.requested = requested
        super().__init__(f"Unsupported locale: {requested!r}")
