"""Database model and queries for contact form submissions."""

import secrets
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import Column, String, Text, DateTime, CheckConstraint, Index, func
from sqlalchemy.orm import Session

from agency_site.shared.database import Base, JSONDocument
from agency_site.shared.security.input_validation import validate_object_id


def generate_submission_id() -> str:
    """24 hexadecimal characters, the shape back-office lookups validate against."""
    return secrets.token_hex(12)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContactSubmission(Base):
    """One contact form attempt that passed every check."""
    __tablename__ = "contact_submissions"

    id = Column(String(24), primary_key=True, default=generate_submission_id)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)
    company = Column(String(100), nullable=True)
    message = Column(Text, nullable=False)
    subject = Column(String(200), nullable=True)
    locale = Column(String(2), nullable=False)
    status = Column(String, default="new", nullable=False, index=True)  # new, read, replied, archived
    source = Column(String, nullable=False)  # e.g. 'contact_form'
    meta_data = Column('metadata', JSONDocument, nullable=True)  # userAgent, ip, referrer (column name is 'metadata' in DB)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    read_at = Column(DateTime(timezone=True), nullable=True)
    replied_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint("status IN ('new', 'read', 'replied', 'archived')", name="check_contact_status"),
        CheckConstraint("locale IN ('id', 'en')", name="check_contact_locale"),
        Index('idx_contact_submissions_status_created', 'status', 'created_at'),
    )


def create_contact_submission(db: Session, data: dict, source: str, metadata: Optional[dict] = None) -> ContactSubmission:
    """Insert a new submission with status 'new'. Commits."""
    submission = ContactSubmission(
        **data,
        source=source,
        meta_data=metadata or None,
        status="new",
        created_at=utcnow(),
    )
    db.add(submission)
    db.commit()
    db.refresh(submission)
    return submission


def get_contact_submissions(db: Session, status: Optional[str] = None) -> List[ContactSubmission]:
    """All submissions, optionally filtered by status, newest first."""
    query = db.query(ContactSubmission)
    if status:
        query = query.filter(ContactSubmission.status == status)
    return query.order_by(ContactSubmission.created_at.desc()).all()


def get_contact_submission_by_id(db: Session, submission_id: str) -> Optional[ContactSubmission]:
    """Look up one submission. Raises InvalidFormat for malformed ids."""
    object_id = validate_object_id(submission_id)
    return db.query(ContactSubmission).filter(ContactSubmission.id == object_id).first()


def update_contact_submission_status(db: Session, submission_id: str, status: str) -> Optional[ContactSubmission]:
    """Set status, stamping read_at/replied_at the first time those states are reached."""
    submission = get_contact_submission_by_id(db, submission_id)
    if submission is None:
        return None

    submission.status = status
    now = utcnow()
    if status == "read" and submission.read_at is None:
        submission.read_at = now
    if status == "replied" and submission.replied_at is None:
        submission.replied_at = now

    db.commit()
    db.refresh(submission)
    return submission


def get_recent_contact_submissions(db: Session, limit: int = 10) -> List[ContactSubmission]:
    return (
        db.query(ContactSubmission)
        .order_by(ContactSubmission.created_at.desc())
        .limit(limit)
        .all()
    )


def get_contact_submission_stats(db: Session) -> Dict[str, int]:
    """Submission counts keyed by status."""
    rows = (
        db.query(ContactSubmission.status, func.count(ContactSubmission.id))
        .group_by(ContactSubmission.status)
        .all()
    )
    return {status: count for status, count in rows}
