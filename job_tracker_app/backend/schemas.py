import re
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, constr, validator
from pydantic.alias_generators import to_camel

JobStatus = Literal[
    "Applied",
    "Shortlisted",
    "Interview Scheduled",
    "Technical Interview",
    "Offer Received",
    "Rejected",
    "Withdrawn",
]
JobCategory = Literal["Big Tech", "Startup", "Mid-Tier", "Other"]

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire; both accepted on input."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# User Schemas
class UserCreate(BaseModel):
    username: constr(strip_whitespace=True, min_length=3, max_length=30)
    password: str = Field(..., min_length=6)


class UserLogin(BaseModel):
    username: constr(strip_whitespace=True)
    password: str


class User(BaseModel):
    id: str
    username: str

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    message: str
    user: User


class MeResponse(BaseModel):
    user: User


class MessageResponse(BaseModel):
    message: str


# Job Application Schemas
def _check_date(value: str) -> str:
    try:
        if not DATE_PATTERN.fullmatch(value):
            raise ValueError(value)
        date.fromisoformat(value)
    except ValueError:
        raise ValueError("dateApplied must be a calendar date (YYYY-MM-DD)")
    return value


class JobCreate(CamelModel):
    company: constr(strip_whitespace=True, min_length=1)
    role: constr(strip_whitespace=True, min_length=1)
    date_applied: str
    status: JobStatus = "Applied"
    notes: str = ""
    category: JobCategory = "Other"

    @validator("date_applied")
    def validate_date_applied(cls, v):
        return _check_date(v)


class JobUpdate(CamelModel):
    company: Optional[constr(strip_whitespace=True, min_length=1)] = None
    role: Optional[constr(strip_whitespace=True, min_length=1)] = None
    date_applied: Optional[str] = None
    status: Optional[JobStatus] = None
    notes: Optional[str] = None
    category: Optional[JobCategory] = None

    @validator("*", pre=True)
    def reject_null(cls, v):
        # Omit a field to leave it untouched; null is not a value
        if v is None:
            raise ValueError("field may not be null")
        return v

    @validator("date_applied")
    def validate_date_applied(cls, v):
        return _check_date(v)


class Job(CamelModel):
    id: str
    company: str
    role: str
    date_applied: str
    status: JobStatus
    notes: str
    category: JobCategory
    created_at: datetime
    updated_at: datetime


class JobDeleteRequest(BaseModel):
    ids: List[str]


class JobDeleteResult(CamelModel):
    deleted_count: int
