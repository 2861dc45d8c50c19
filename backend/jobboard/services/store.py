"""
Entity store.

CRUD accessors for users, companies and jobs over a SQLAlchemy session.
Uniqueness of user emails and company names is enforced here; every
database failure is rolled back and re-raised as ``StorageError`` so the
API never leaks driver detail.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from jobboard.core.errors import (
    CompanyNotFound,
    DuplicateEmail,
    DuplicateName,
    JobNotFound,
    StorageError,
    UserNotFound,
)
from jobboard.models import Company, Job, User

logger = logging.getLogger(__name__)


@contextmanager
def transaction(db: Session, duplicate: Optional[type] = None) -> Iterator[Session]:
    """
    Commit everything done inside the block as one write.

    On ``IntegrityError`` the ``duplicate`` error class is raised (if given);
    any other SQLAlchemy failure becomes ``StorageError``. Both roll back.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Integrity error: %s", exc.orig)
        if duplicate is not None:
            raise duplicate() from exc
        raise StorageError() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Database error")
        raise StorageError() from exc


@contextmanager
def reading() -> Iterator[None]:
    """Map read failures to ``StorageError``."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Database read failed")
        raise StorageError() from exc


def apply_fields(entity: Any, fields: dict) -> None:
    for key, value in fields.items():
        setattr(entity, key, value)


# ============== Users ==============


def get_user(db: Session, user_id: str) -> Optional[User]:
    with reading():
        return db.get(User, user_id)


def require_user(db: Session, user_id: str) -> User:
    user = get_user(db, user_id)
    if user is None:
        raise UserNotFound()
    return user


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get a user by email address."""
    with reading():
        return db.query(User).filter(User.email == email).first()


def create_user(db: Session, **fields) -> User:
    if get_user_by_email(db, fields["email"]):
        raise DuplicateEmail()

    user = User(**fields)
    with transaction(db, duplicate=DuplicateEmail):
        db.add(user)
    db.refresh(user)
    return user


def update_user(db: Session, user: User, fields: dict) -> User:
    """Apply a partial update. ``fields`` holds only what the caller sent."""
    email = fields.get("email")
    if email and email != user.email:
        other = get_user_by_email(db, email)
        if other is not None and other.id != user.id:
            raise DuplicateEmail("Email already in use")

    with transaction(db, duplicate=DuplicateEmail):
        apply_fields(user, fields)
    db.refresh(user)
    return user


def set_applied_jobs(db: Session, user: User, job_ids: list[str]) -> User:
    with transaction(db):
        user.applied_jobs = list(job_ids)
    db.refresh(user)
    return user


def delete_user(db: Session, user: User) -> None:
    """Delete the user. A company they own goes with them, jobs included."""
    owned = get_company_by_owner(db, user.id)
    with transaction(db):
        if owned is not None:
            db.delete(owned)
            db.flush()
        db.delete(user)


# ============== Companies ==============


def get_company(db: Session, company_id: str) -> Optional[Company]:
    with reading():
        return db.get(Company, company_id)


def require_company(db: Session, company_id: Optional[str]) -> Company:
    company = get_company(db, company_id) if company_id else None
    if company is None:
        raise CompanyNotFound()
    return company


def get_company_by_name(db: Session, name: str) -> Optional[Company]:
    with reading():
        return db.query(Company).filter(Company.name == name).first()


def get_company_by_owner(db: Session, user_id: str) -> Optional[Company]:
    with reading():
        return db.query(Company).filter(Company.created_by == user_id).first()


def list_companies(db: Session) -> list[Company]:
    with reading():
        return db.query(Company).all()


def create_company_for_owner(db: Session, owner: User, fields: dict) -> Company:
    """
    Insert the company and point ``owner.company_id`` at it in one commit.

    Either both rows change or neither does.
    """
    company = Company(**fields, created_by=owner.id)
    with transaction(db, duplicate=DuplicateName):
        db.add(company)
        db.flush()
        owner.company_id = company.id
    db.refresh(company)
    db.refresh(owner)
    return company


def update_company(db: Session, company: Company, fields: dict) -> Company:
    name = fields.get("name")
    if name and name != company.name:
        other = get_company_by_name(db, name)
        if other is not None and other.id != company.id:
            raise DuplicateName()

    with transaction(db, duplicate=DuplicateName):
        apply_fields(company, fields)
    db.refresh(company)
    return company


def delete_company(db: Session, company: Company) -> None:
    """Delete the company together with its job postings."""
    with transaction(db):
        db.delete(company)


# ============== Jobs ==============


def get_job(db: Session, job_id: str) -> Optional[Job]:
    with reading():
        return (
            db.query(Job)
            .options(selectinload(Job.company))
            .filter(Job.id == job_id)
            .first()
        )


def require_job(db: Session, job_id: str) -> Job:
    job = get_job(db, job_id)
    if job is None:
        raise JobNotFound()
    return job


def list_jobs(db: Session) -> list[Job]:
    """All jobs in insertion order, company populated."""
    with reading():
        return db.query(Job).options(selectinload(Job.company)).order_by(Job.date_posted).all()


def get_jobs(db: Session, job_ids: list[str]) -> list[Job]:
    """Jobs for the given ids, in the order given. Unknown ids are skipped."""
    if not job_ids:
        return []
    with reading():
        found = {
            job.id: job
            for job in db.query(Job).options(selectinload(Job.company)).filter(Job.id.in_(job_ids))
        }
    return [found[job_id] for job_id in job_ids if job_id in found]


def jobs_for_company(db: Session, company_id: str) -> list[Job]:
    with reading():
        return (
            db.query(Job)
            .options(selectinload(Job.company))
            .filter(Job.company_id == company_id)
            .order_by(Job.date_posted)
            .all()
        )


def search_jobs(
    db: Session,
    keyword: Optional[str] = None,
    location: Optional[str] = None,
) -> list[Job]:
    """Case-insensitive substring search on title (keyword) and location."""
    query = db.query(Job).options(selectinload(Job.company))
    if keyword:
        query = query.filter(Job.title.ilike(f"%{keyword}%"))
    if location:
        query = query.filter(Job.location.ilike(f"%{location}%"))
    with reading():
        return query.order_by(Job.date_posted).all()


def create_job(db: Session, company: Company, fields: dict) -> Job:
    job = Job(**fields, company_id=company.id)
    with transaction(db):
        db.add(job)
    db.refresh(job)
    return job


def update_job(db: Session, job: Job, fields: dict) -> Job:
    with transaction(db):
        apply_fields(job, fields)
    db.refresh(job)
    return job


def delete_job(db: Session, job: Job) -> None:
    with transaction(db):
        db.delete(job)
