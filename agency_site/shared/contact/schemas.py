"""Pydantic schemas for the contact API."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import (
    BaseModel,
    EmailStr,
    Field,
    TypeAdapter,
    ValidationError as PydanticValidationError,
    field_validator,
    model_validator,
)

from agency_site.shared.errors import ValidationFailed

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 255
MAX_PHONE_LENGTH = 20
MAX_COMPANY_LENGTH = 100
MIN_MESSAGE_LENGTH = 10
MAX_MESSAGE_LENGTH = 5000
MAX_SUBJECT_LENGTH = 200

NAME_PATTERN = r"^[a-zA-Z\s'-]+$"
PHONE_PATTERN = r"^[0-9\s()+-]*$"

_email_adapter = TypeAdapter(EmailStr)

# (field, pydantic error type) -> message shown to the visitor
FIELD_MESSAGES = {
    ("name", "string_too_short"): f"Name must be at least {MIN_NAME_LENGTH} characters",
    ("name", "string_too_long"): "Name is too long",
    ("name", "string_pattern_mismatch"): "Name contains invalid characters",
    ("email", "string_too_long"): "Email is too long",
    ("phone", "string_too_long"): "Phone number is too long",
    ("phone", "string_pattern_mismatch"): "Phone contains invalid characters",
    ("company", "string_too_long"): "Company name is too long",
    ("message", "string_too_short"): f"Message must be at least {MIN_MESSAGE_LENGTH} characters",
    ("message", "string_too_long"): "Message is too long",
    ("subject", "string_too_long"): "Subject is too long",
    ("locale", "literal_error"): "Locale must be 'id' or 'en'",
}


class SubmissionStatus(str, Enum):
    """Back-office lifecycle of a contact submission."""
    NEW = "new"
    READ = "read"
    REPLIED = "replied"
    ARCHIVED = "archived"


class ContactSubmissionCreate(BaseModel):
    """
    Contact form input.

    Length and character rules apply to the raw values; surrounding whitespace is
    stripped afterwards, and blank optional fields become None.
    """
    name: str = Field(..., min_length=MIN_NAME_LENGTH, max_length=MAX_NAME_LENGTH, pattern=NAME_PATTERN)
    email: str = Field(..., max_length=MAX_EMAIL_LENGTH)
    phone: Optional[str] = Field(None, max_length=MAX_PHONE_LENGTH, pattern=PHONE_PATTERN)
    company: Optional[str] = Field(None, max_length=MAX_COMPANY_LENGTH)
    message: str = Field(..., min_length=MIN_MESSAGE_LENGTH, max_length=MAX_MESSAGE_LENGTH)
    subject: Optional[str] = Field(None, max_length=MAX_SUBJECT_LENGTH)
    locale: Literal["id", "en"]

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data):
        """Treat an explicit null the same as an absent field."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @field_validator("name", "message")
    @classmethod
    def validate_required_text(cls, v, info):
        cleaned = v.strip()
        if not cleaned:
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return cleaned

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        try:
            return str(_email_adapter.validate_python(v.strip()))
        except PydanticValidationError:
            raise ValueError("Invalid email address")

    @field_validator("phone", "company", "subject")
    @classmethod
    def blank_to_none(cls, v):
        if v is None:
            return None
        return v.strip() or None


class ContactChallenge(BaseModel):
    """Arithmetic challenge shown as `a + b = ?`."""
    question: str
    token: str


class ContactResponse(BaseModel):
    """Successful submission."""
    success: bool = True
    message: str
    id: str
    challenge: Optional[ContactChallenge] = None


class FieldError(BaseModel):
    field: str
    message: str


class ContactErrorResponse(BaseModel):
    """Rejected submission."""
    success: bool = False
    error: str
    details: Optional[List[FieldError]] = None
    detail: Optional[str] = None  # Raw error text, non-production only
    challenge: Optional[ContactChallenge] = None


class ContactSubmissionResponse(BaseModel):
    """Stored submission as seen by the back office."""
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None
    message: str
    subject: Optional[str] = None
    locale: str
    status: SubmissionStatus
    source: str
    metadata: Optional[Dict[str, Any]] = Field(None, validation_alias="meta_data")
    created_at: datetime
    read_at: Optional[datetime] = None
    replied_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StatusUpdate(BaseModel):
    status: SubmissionStatus


def _field_error(err: Dict[str, Any]) -> Dict[str, str]:
    field = str(err["loc"][0]) if err["loc"] else "body"
    error_type = err["type"]
    if error_type == "missing":
        message = f"{field.capitalize()} is required"
    elif error_type == "string_type":
        message = "Expected string"
    elif error_type == "value_error":
        message = str(err["ctx"]["error"])
    else:
        message = FIELD_MESSAGES.get((field, error_type), err["msg"])
    return {"field": field, "message": message}


def validate_contact_fields(body: Any) -> ContactSubmissionCreate:
    """
    Validate a submitted contact payload, reporting every failing field together.

    Raises:
        ValidationFailed with one {field, message} entry per failing field
    """
    if not isinstance(body, dict):
        raise ValidationFailed([{"field": "body", "message": "Expected a JSON object"}])
    try:
        return ContactSubmissionCreate.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationFailed([_field_error(err) for err in e.errors()])
