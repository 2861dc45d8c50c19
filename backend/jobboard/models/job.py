from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from jobboard.db.base import Base
from jobboard.models.user import generate_uuid, utcnow


class Job(Base):
    """Job posting. ``company_id`` is fixed at creation."""

    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String, nullable=False, index=True)
    company_id = Column(String(36), ForeignKey("companies.id"), index=True, nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=False)
    salary = Column(String, nullable=True)
    location = Column(String, nullable=True)
    date_posted = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    company = relationship("Company", back_populates="jobs")
