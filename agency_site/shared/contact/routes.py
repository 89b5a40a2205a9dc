"""Contact routes: challenge issuing and form submission."""

import os
import json
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agency_site.shared.contact.captcha import issue_challenge
from agency_site.shared.contact.database import create_contact_submission
from agency_site.shared.contact.notifications import send_submission_notification
from agency_site.shared.contact.pipeline import ClientInfo, ContactSubmissionPipeline, SOURCE
from agency_site.shared.contact.schemas import ContactChallenge, ContactResponse, ContactErrorResponse
from agency_site.shared.database import get_db
from agency_site.shared.errors import StorageUnavailable
from agency_site.shared.ratelimit.limiter import InMemoryRateLimiterStore, RateLimiter

router = APIRouter(prefix="/api/contact", tags=["contact"])

# Rate limiting configuration
RATE_LIMIT_MAX_REQUESTS = int(os.environ.get("CONTACT_RATE_LIMIT_MAX_REQUESTS", "3"))
RATE_LIMIT_WINDOW_SECONDS = float(os.environ.get("CONTACT_RATE_LIMIT_WINDOW_SECONDS", "60"))

# Process-wide; not shared between server instances
contact_rate_limiter = RateLimiter(
    InMemoryRateLimiterStore(),
    max_requests=RATE_LIMIT_MAX_REQUESTS,
    window_seconds=RATE_LIMIT_WINDOW_SECONDS,
)


def trust_proxy_headers() -> bool:
    """Whether X-Forwarded-For and X-Real-IP may identify the client (TRUST_PROXY_HEADERS)."""
    return os.environ.get("TRUST_PROXY_HEADERS", "false").lower() in ("1", "true", "yes")


def get_client_ip(request: Request) -> str:
    """Get client IP address for rate limiting."""
    if not trust_proxy_headers():
        return request.client.host if request.client else "unknown"
    # Forwarded IP set by the proxy/load balancer
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP in the chain
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else "unknown"


def get_rate_limiter() -> RateLimiter:
    return contact_rate_limiter


@router.get("/challenge", response_model=ContactChallenge)
async def get_contact_challenge():
    """Issue a fresh arithmetic challenge for the contact form."""
    return issue_challenge()


@router.post(
    "",
    response_model=ContactResponse,
    responses={400: {"model": ContactErrorResponse}, 429: {"model": ContactErrorResponse}, 500: {"model": ContactErrorResponse}},
)
async def submit_contact_form(
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    Submit the contact form.

    Checks, in order: rate limit (per client IP), hidden decoy field, arithmetic
    challenge, field validation. Exactly one record is written when all pass.
    Every response carries a new challenge for the next attempt.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = None

    def persist(data: dict, metadata: dict) -> str:
        try:
            return create_contact_submission(db, data, source=SOURCE, metadata=metadata).id
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageUnavailable(str(e)) from e

    client = ClientInfo(
        address=get_client_ip(request),
        user_agent=request.headers.get("User-Agent"),
        referrer=request.headers.get("Referer"),
    )
    result = await ContactSubmissionPipeline(rate_limiter, persist).submit(body, client)

    if result.record_id is not None:
        background_tasks.add_task(send_submission_notification, result.record_id, result.data)
        logging.info(f"Contact submission {result.record_id} stored")

    return JSONResponse(status_code=result.status_code, content=result.body)
