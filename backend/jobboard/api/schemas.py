"""
Request and response schemas shared by the v1 routers.

Update schemas are partial: only fields present in the request body are
applied, an explicit ``null`` clears an optional field, and required
fields refuse ``null``.
"""

import re
from datetime import datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jobboard.core.errors import ValidationFailed
from jobboard.models import Role

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")


def normalize_email(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email format")
    return value.lower()


class PartialUpdate(BaseModel):
    """Base for ``PUT`` bodies. ``changes()`` returns only what was sent."""

    not_nullable: ClassVar[tuple[str, ...]] = ()

    def changes(self) -> dict:
        fields = self.model_dump(exclude_unset=True)
        errors = {
            name: f"{name} cannot be cleared"
            for name in self.not_nullable
            if name in fields and fields[name] is None
        }
        if errors:
            raise ValidationFailed(errors)
        return fields


# ============== Users ==============


class UserRegister(BaseModel):
    """Schema for user registration."""

    name: str = Field(min_length=1)
    email: str
    password: str = Field(min_length=1)
    role: Role = Role.JOBSEEKER

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class UserLogin(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class UserUpdate(PartialUpdate):
    not_nullable = ("name", "email")

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    resume: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return normalize_email(v) if v is not None else v


class UserResponse(BaseModel):
    """User profile without the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: Role
    resume: Optional[str] = None
    applied_jobs: list[str] = []
    company_id: Optional[str] = None
    date: Optional[datetime] = None


class Token(BaseModel):
    token: str


class Message(BaseModel):
    msg: str


# ============== Companies ==============


class CompanyCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    industry: str = Field(min_length=1)
    website: str = Field(min_length=1)
    logo: Optional[str] = None


class CompanyUpdate(PartialUpdate):
    not_nullable = ("name", "description", "industry", "website")

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    industry: Optional[str] = Field(default=None, min_length=1)
    website: Optional[str] = Field(default=None, min_length=1)
    logo: Optional[str] = None


class CompanyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    industry: str
    website: str
    logo: Optional[str] = None
    created_by: str


class CompanyCreatedResponse(BaseModel):
    """New company plus the reissued token carrying its id."""

    company: CompanyResponse
    token: str


# ============== Jobs ==============


class JobCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    requirements: str = Field(min_length=1)
    salary: Optional[str] = None
    location: Optional[str] = None


class JobUpdate(PartialUpdate):
    not_nullable = ("title", "description", "requirements")

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    requirements: Optional[str] = Field(default=None, min_length=1)
    salary: Optional[str] = None
    location: Optional[str] = None


class JobResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    company_id: str
    company: Optional[CompanyResponse] = None
    description: str
    requirements: str
    salary: Optional[str] = None
    location: Optional[str] = None
    date_posted: Optional[datetime] = None


class SimilarJobResponse(JobResponse):
    similarity_score: float
