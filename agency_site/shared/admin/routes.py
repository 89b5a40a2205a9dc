"""Admin routes for reviewing contact submissions."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from agency_site.shared.admin.dependencies import verify_admin
from agency_site.shared.contact.database import (
    get_contact_submission_by_id,
    get_contact_submission_stats,
    get_contact_submissions,
    get_recent_contact_submissions,
    update_contact_submission_status,
)
from agency_site.shared.contact.schemas import ContactSubmissionResponse, StatusUpdate, SubmissionStatus
from agency_site.shared.database import get_db
from agency_site.shared.security.input_validation import validate_number

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(verify_admin)])


@router.get("/contact", response_model=List[ContactSubmissionResponse])
async def list_contact_submissions(
    status_filter: Optional[SubmissionStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    """All submissions, newest first, optionally filtered by status."""
    return get_contact_submissions(db, status_filter.value if status_filter else None)


@router.get("/contact/recent", response_model=List[ContactSubmissionResponse])
async def list_recent_contact_submissions(limit: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return get_recent_contact_submissions(db, validate_number(limit, 1, 100, default=10))


@router.get("/contact/stats")
async def contact_submission_stats(db: Session = Depends(get_db)):
    """Submission counts per status."""
    counts = get_contact_submission_stats(db)
    return {s.value: counts.get(s.value, 0) for s in SubmissionStatus}


@router.get("/contact/{submission_id}", response_model=ContactSubmissionResponse)
async def get_contact_submission(submission_id: str, db: Session = Depends(get_db)):
    submission = get_contact_submission_by_id(db, submission_id)
    if not submission:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Contact submission '{submission_id}' not found"
        )
    return submission


@router.patch("/contact/{submission_id}", response_model=ContactSubmissionResponse)
async def update_contact_submission(submission_id: str, update: StatusUpdate, db: Session = Depends(get_db)):
    """Move a submission through new -> read -> replied, or archive it."""
    submission = update_contact_submission_status(db, submission_id, update.status.value)
    if not submission:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Contact submission '{submission_id}' not found"
        )
    return submission
