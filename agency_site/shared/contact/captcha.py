"""Arithmetic challenge tokens for the contact form."""

import os
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt

from agency_site.shared.errors import ChallengeFailed

ALGORITHM = "HS256"
TOKEN_TYPE = "contact_challenge"
MIN_OPERAND = 1
MAX_OPERAND = 20
DECOY_FIELD = "website"


def _secret_key() -> str:
    secret_key = os.environ.get("SECRET_KEY")
    if not secret_key:
        raise ValueError(
            "SECRET_KEY environment variable is required for contact challenges. "
            "Please set it to a secure random string."
        )
    return secret_key


def _ttl() -> timedelta:
    return timedelta(minutes=int(os.environ.get("CAPTCHA_TTL_MINUTES", "30")))


def issue_challenge(a: Optional[int] = None, b: Optional[int] = None) -> dict:
    """Generate `a + b = ?` and a signed token that lets the server check the answer."""
    if a is None:
        a = MIN_OPERAND + secrets.randbelow(MAX_OPERAND - MIN_OPERAND + 1)
    if b is None:
        b = MIN_OPERAND + secrets.randbelow(MAX_OPERAND - MIN_OPERAND + 1)
    payload = {
        "a": a,
        "b": b,
        "type": TOKEN_TYPE,
        "exp": datetime.now(timezone.utc) + _ttl(),
    }
    return {
        "question": f"{a} + {b} = ?",
        "token": jwt.encode(payload, _secret_key(), algorithm=ALGORITHM),
    }


def verify_challenge(token: Any, answer: Any) -> None:
    """
    Check the answer against the operands signed into the token.

    Raises:
        ChallengeFailed if the token is missing, forged or expired, or the answer
        is not the exact integer sum
    """
    if not isinstance(token, str) or not token:
        raise ChallengeFailed("Missing challenge token")
    try:
        payload = jwt.decode(token, _secret_key(), algorithms=[ALGORITHM])
    except JWTError:
        raise ChallengeFailed("Invalid or expired challenge token")
    if payload.get("type") != TOKEN_TYPE:
        raise ChallengeFailed("Wrong token type")

    try:
        if isinstance(answer, bool) or (isinstance(answer, float) and not answer.is_integer()):
            raise ValueError("not an integer answer")
        given = int(answer.strip()) if isinstance(answer, str) else int(answer)
    except (TypeError, ValueError):
        raise ChallengeFailed("Answer is not a number")

    if given != payload["a"] + payload["b"]:
        logging.info("Contact challenge answered incorrectly")
        raise ChallengeFailed("Wrong answer")


def decoy_filled(body: dict) -> bool:
    """True when the hidden decoy field carries any value at all."""
    value = body.get(DECOY_FIELD)
    if value is None:
        return False
    if isinstance(value, str):
        return value != ""
    return True
