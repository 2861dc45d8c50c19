from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship

from jobboard.db.base import Base
from jobboard.models.user import generate_uuid


class Company(Base):
    """Company profile, owned by exactly one company-role user."""

    __tablename__ = "companies"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String, unique=True, index=True, nullable=False)
    description = Column(String, nullable=False)
    industry = Column(String, nullable=False)
    website = Column(String, nullable=False)
    logo = Column(String, nullable=True)
    created_by = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)

    # Relationships
    jobs = relationship("Job", back_populates="company", cascade="all, delete-orphan")
