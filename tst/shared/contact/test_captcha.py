"""Tests for the arithmetic challenge and the decoy field."""

import os

import pytest
from jose import jwt

from agency_site.shared.contact.captcha import (
    ALGORITHM,
    MAX_OPERAND,
    MIN_OPERAND,
    decoy_filled,
    issue_challenge,
    verify_challenge,
)
from agency_site.shared.errors import ChallengeFailed


def test_issue_challenge_formats_question():
    challenge = issue_challenge(3, 4)
    assert challenge["question"] == "3 + 4 = ?"
    assert challenge["token"]


def test_random_operands_stay_in_range():
    for _ in range(50):
        token = issue_challenge()["token"]
        payload = jwt.decode(token, os.environ["SECRET_KEY"], algorithms=[ALGORITHM])
        assert MIN_OPERAND <= payload["a"] <= MAX_OPERAND
        assert MIN_OPERAND <= payload["b"] <= MAX_OPERAND


@pytest.mark.parametrize("answer", ["7", " 7 ", 7, 7.0])
def test_correct_answer_passes(answer):
    verify_challenge(issue_challenge(3, 4)["token"], answer)


@pytest.mark.parametrize("answer", ["8", "", "seven", None, 7.5, True, "34"])
def test_wrong_answer_fails(answer):
    with pytest.raises(ChallengeFailed):
        verify_challenge(issue_challenge(3, 4)["token"], answer)


def test_missing_token_fails():
    with pytest.raises(ChallengeFailed):
        verify_challenge(None, "7")
    with pytest.raises(ChallengeFailed):
        verify_challenge("", "7")


def test_forged_token_fails():
    forged = jwt.encode({"a": 1, "b": 1, "type": "contact_challenge"}, "other-secret", algorithm=ALGORITHM)
    with pytest.raises(ChallengeFailed):
        verify_challenge(forged, "2")


def test_token_of_another_type_fails():
    token = jwt.encode({"a": 1, "b": 1, "type": "access"}, os.environ["SECRET_KEY"], algorithm=ALGORITHM)
    with pytest.raises(ChallengeFailed):
        verify_challenge(token, "2")


def test_expired_token_fails(monkeypatch):
    monkeypatch.setenv("CAPTCHA_TTL_MINUTES", "-1")
    token = issue_challenge(3, 4)["token"]
    with pytest.raises(ChallengeFailed):
        verify_challenge(token, "7")


def test_decoy_filled():
    assert decoy_filled({}) is False
    assert decoy_filled({"website": None}) is False
    assert decoy_filled({"website": ""}) is False
    assert decoy_filled({"website": "http://spam.example"}) is True
    assert decoy_filled({"website": " "}) is True
