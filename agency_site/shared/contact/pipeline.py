"""
Contact submission pipeline.

Checks run in a fixed order: rate limit, body shape, decoy field, challenge, field rules.
The first failing check rejects the attempt. The only suspension point is the single
write to the content store; every check before it is synchronous and in-memory.
"""

import logging
import time
from enum import Enum
from typing import Any, Callable, NamedTuple, Optional

from starlette.concurrency import run_in_threadpool

from agency_site.shared.contact.captcha import decoy_filled, issue_challenge, verify_challenge
from agency_site.shared.contact.database import generate_submission_id
from agency_site.shared.contact.schemas import ContactSubmissionCreate, validate_contact_fields
from agency_site.shared.errors import BotSuspected, ChallengeFailed, LocaleNotFound, RateLimited, ValidationFailed
from agency_site.shared.i18n.locale import Locale, resolve_locale, get_default_locale
from agency_site.shared.i18n.messages import message_for
from agency_site.shared.ratelimit.limiter import RateLimiter
from agency_site.shared.security.input_validation import is_production, truncate

SOURCE = "contact_form"
MAX_USER_AGENT_LENGTH = 200
MAX_IP_LENGTH = 45  # IPv6 max length
MAX_REFERRER_LENGTH = 500


class PipelineState(str, Enum):
    """Outcome of one attempt."""
    RESPONDED = "responded"
    REJECTED = "rejected"


class ClientInfo(NamedTuple):
    """Request facts the pipeline needs, taken from headers by the route."""
    address: str
    user_agent: Optional[str] = None
    referrer: Optional[str] = None


class PipelineResult(NamedTuple):
    status_code: int
    body: dict
    state: PipelineState
    # Set only when a record was written
    record_id: Optional[str] = None
    data: Optional[dict] = None


def build_metadata(client: ClientInfo) -> dict:
    """Truncated request metadata stored alongside the submission."""
    metadata = {
        "userAgent": truncate(client.user_agent, MAX_USER_AGENT_LENGTH),
        "ip": truncate(client.address, MAX_IP_LENGTH) if client.address != "unknown" else None,
        "referrer": truncate(client.referrer, MAX_REFERRER_LENGTH),
    }
    return {key: value for key, value in metadata.items() if value is not None}


class ContactSubmissionPipeline:
    """
    Runs one contact form attempt through the abuse checks and validation.

    Args:
        rate_limiter: Shared sliding-window limiter
        persist: Blocking callable (data, metadata) -> record id; run in the threadpool
        clock: Time source in seconds, used for rate limiting
    """

    def __init__(self, rate_limiter: RateLimiter, persist: Callable[[dict, dict], str],
                 clock: Callable[[], float] = time.time, source: str = SOURCE):
        self.rate_limiter = rate_limiter
        self.persist = persist
        self.clock = clock
        self.source = source

    @staticmethod
    def _reply_locale(body: Any) -> Locale:
        try:
            return resolve_locale(body.get("locale") if isinstance(body, dict) else None)
        except LocaleNotFound:
            return get_default_locale()

    def _reject(self, status_code: int, payload: dict) -> PipelineResult:
        payload = {"success": False, **payload, "challenge": issue_challenge()}
        return PipelineResult(status_code, payload, PipelineState.REJECTED)

    def _screen(self, body: Any, client: ClientInfo) -> ContactSubmissionCreate:
        """
        Run the in-memory checks in order and return the validated input.

        Raises:
            RateLimited, ValidationFailed, BotSuspected or ChallengeFailed on the first rejection
        """
        if not self.rate_limiter.allow(client.address, self.clock()):
            raise RateLimited(client.address)
        if not isinstance(body, dict):
            raise ValidationFailed([{"field": "body", "message": "Expected a JSON object"}])
        if decoy_filled(body):
            raise BotSuspected(client.address)
        verify_challenge(body.get("captchaToken"), body.get("captcha"))
        return validate_contact_fields(body)

    async def submit(self, body: Any, client: ClientInfo) -> PipelineResult:
        locale = self._reply_locale(body)

        try:
            validated = self._screen(body, client)
        except RateLimited:
            logging.warning(f"Contact rate limit exceeded for {client.address}")
            return self._reject(429, {"error": message_for("too_many_requests", locale)})
        except BotSuspected:
            # Same shape as a real success; nothing is written
            logging.warning(f"Contact submission dropped (bot suspected) from {client.address}")
            return PipelineResult(200, {
                "success": True,
                "message": message_for("contact_success", locale),
                "id": generate_submission_id(),
                "challenge": issue_challenge(),
            }, PipelineState.REJECTED)
        except ChallengeFailed as e:
            logging.info(f"Contact challenge failed from {client.address}: {e}")
            return self._reject(400, {"error": message_for("challenge_failed", locale)})
        except ValidationFailed as e:
            return self._reject(400, {"error": "Validation failed", "details": e.details})

        data = validated.model_dump()
        try:
            record_id = await run_in_threadpool(self.persist, data, build_metadata(client))
        except Exception as e:
            logging.error(f"Failed to store contact submission: {str(e)}", exc_info=True)
            payload = {"error": message_for("submit_failed", data["locale"])}
            if not is_production():
                payload["detail"] = str(e)
            return self._reject(500, payload)
        body = {
            "success": True,
            "message": message_for("contact_success", data["locale"]),
            "id": record_id,
            "challenge": issue_challenge(),
        }
        return PipelineResult(200, body, PipelineState.RESPONDED, record_id=record_id, data=data)
