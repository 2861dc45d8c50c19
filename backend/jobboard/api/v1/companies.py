"""
Company API endpoints.

Listing and lookups are public. A company-role user creates one company
and then manages it through ``/me``.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobboard.api.schemas import (
    CompanyCreate,
    CompanyCreatedResponse,
    CompanyResponse,
    CompanyUpdate,
    JobResponse,
    Message,
)
from jobboard.api.v1.auth import get_current_claims
from jobboard.core.errors import CompanyNotFound
from jobboard.core.security import TokenClaims, TokenService, get_token_service
from jobboard.db.session import get_db
from jobboard.models import Company
from jobboard.services import coordinator, store
from jobboard.services.policy import Action, enforce

router = APIRouter()


def get_owned_company(db: Session, claims: TokenClaims) -> Company:
    """
    The caller's company.

    Tokens issued before the company existed carry no company id, so fall
    back to the ownership lookup.
    """
    enforce(claims, Action.MANAGE_COMPANY)
    company = store.get_company(db, claims.company_id) if claims.company_id else None
    if company is None:
        company = store.get_company_by_owner(db, claims.id)
    if company is None or company.created_by != claims.id:
        raise CompanyNotFound()
    return company


@router.get("", response_model=list[CompanyResponse])
def get_all_companies(db: Session = Depends(get_db)):
    enforce(None, Action.LIST_COMPANIES)
    return store.list_companies(db)


@router.post("", response_model=CompanyCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_company(
    company_data: CompanyCreate,
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Create the caller's company.

    The response carries a new token whose ``companyId`` points at the
    company; the token used for this request is stale from now on.
    """
    created = coordinator.create_company(db, claims, company_data.model_dump(), tokens)
    return CompanyCreatedResponse(
        company=CompanyResponse.model_validate(created.company),
        token=created.token,
    )


@router.get("/me", response_model=CompanyResponse)
def get_current_company_profile(
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    return get_owned_company(db, claims)


@router.put("/me", response_model=CompanyResponse)
def update_company_profile(
    update: CompanyUpdate,
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    company = get_owned_company(db, claims)
    return store.update_company(db, company, update.changes())


@router.delete("/me", response_model=Message)
def delete_company(
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    """Delete the caller's company and its job postings."""
    company = get_owned_company(db, claims)
    store.delete_company(db, company)
    return Message(msg="Company deleted")


@router.get("/{company_id}/jobs", response_model=list[JobResponse])
def get_company_job_listings(company_id: str, db: Session = Depends(get_db)):
    enforce(None, Action.LIST_COMPANY_JOBS)
    store.require_company(db, company_id)
    return store.jobs_for_company(db, company_id)


@router.get("/{company_id}", response_model=CompanyResponse)
def get_company_by_id(company_id: str, db: Session = Depends(get_db)):
    enforce(None, Action.GET_COMPANY)
    return store.require_company(db, company_id)
