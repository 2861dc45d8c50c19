import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, JSON, String

from jobboard.db.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, enum.Enum):
    JOBSEEKER = "jobseeker"
    COMPANY = "company"


class User(Base):
    """User account. Job seekers apply to jobs; company users own one company."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # bcrypt hash, never the plain text
    role = Column(String, nullable=False, default=Role.JOBSEEKER.value)
    resume = Column(String, nullable=True)

    # Ordered job ids, no duplicates. Reassign the list to persist a change.
    applied_jobs = Column(JSON, nullable=False, default=list)

    # Set once when the user creates their company
    company_id = Column(String(36), nullable=True)

    date = Column(DateTime(timezone=True), default=utcnow)
