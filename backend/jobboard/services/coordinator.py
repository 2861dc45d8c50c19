"""
Multi-entity operations.

Company creation touches the company and its owner and must hand back a
fresh token; applying and withdrawing read-modify-write the user's
applied-jobs list.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from jobboard.core.errors import AlreadyApplied, DuplicateName, DuplicateOwnership, NotApplied
from jobboard.core.security import TokenClaims, TokenService
from jobboard.models import Company, Role, User
from jobboard.services import store
from jobboard.services.policy import Action, enforce

logger = logging.getLogger(__name__)


@dataclass
class CompanyCreated:
    company: Company
    token: str


def create_company(
    db: Session,
    claims: TokenClaims,
    fields: dict,
    tokens: TokenService,
) -> CompanyCreated:
    """
    Create the caller's company, link it to the caller and reissue their token.

    The old token keeps verifying until it expires but still says
    ``companyId=None``; callers must switch to the returned one.
    """
    enforce(claims, Action.CREATE_COMPANY)

    owner = store.require_user(db, claims.id)
    if store.get_company_by_owner(db, owner.id) is not None or owner.company_id:
        raise DuplicateOwnership()
    if store.get_company_by_name(db, fields["name"]) is not None:
        raise DuplicateName()

    company = store.create_company_for_owner(db, owner, fields)
    logger.info("Company %s created by user %s", company.id, owner.id)

    fresh = TokenClaims(id=owner.id, role=Role(owner.role), company_id=owner.company_id)
    return CompanyCreated(company=company, token=tokens.issue(fresh))


def apply_to_job(db: Session, claims: TokenClaims, job_id: str) -> User:
    enforce(claims, Action.APPLY)

    store.require_job(db, job_id)
    user = store.require_user(db, claims.id)

    applied = list(user.applied_jobs or [])
    if job_id in applied:
        raise AlreadyApplied()

    applied.append(job_id)
    logger.info("User %s applied to job %s", user.id, job_id)
    return store.set_applied_jobs(db, user, applied)


def withdraw_application(db: Session, claims: TokenClaims, job_id: str) -> User:
    enforce(claims, Action.WITHDRAW)

    user = store.require_user(db, claims.id)

    applied = list(user.applied_jobs or [])
    if job_id not in applied:
        raise NotApplied()

    applied.remove(job_id)
    logger.info("User %s withdrew from job %s", user.id, job_id)
    return store.set_applied_jobs(db, user, applied)
