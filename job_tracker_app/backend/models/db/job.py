from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from .database import Base, utcnow
from .user import generate_id

DEFAULT_STATUS = "Applied"
DEFAULT_CATEGORY = "Other"


class JobApplication(Base):
    __tablename__ = "job_applications"

    id = Column(String(32), primary_key=True, index=True, default=generate_id)
    user_id = Column(String(32), ForeignKey("users.id"), index=True, nullable=False)
    company = Column(String, nullable=False)
    role = Column(String, nullable=False)
    date_applied = Column(String(10), nullable=False)
    status = Column(String, nullable=False, default=DEFAULT_STATUS)
    notes = Column(Text, nullable=False, default="")
    category = Column(String, nullable=False, default=DEFAULT_CATEGORY)
    created_at = Column(DateTime, default=utcnow, index=True, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
