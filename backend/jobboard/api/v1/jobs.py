"""
Job API endpoints.

Reads, search and similar-jobs are public. Writes belong to the company
representative whose token ``companyId`` matches the job's company.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobboard.api.schemas import JobCreate, JobResponse, JobUpdate, Message, SimilarJobResponse
from jobboard.api.v1.auth import get_current_claims
from jobboard.core.security import TokenClaims
from jobboard.db.session import get_db
from jobboard.services import store
from jobboard.services.policy import Action, enforce
from jobboard.services.similarity import rank

router = APIRouter()


@router.get("", response_model=list[JobResponse])
def get_all_jobs(db: Session = Depends(get_db)):
    enforce(None, Action.LIST_JOBS)
    return store.list_jobs(db)


@router.get("/search", response_model=list[JobResponse])
def search_jobs(
    keyword: Optional[str] = Query(default=None),
    location: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
):
    """Case-insensitive match of ``keyword`` in the title and ``location`` in the location."""
    enforce(None, Action.SEARCH_JOBS)
    return store.search_jobs(db, keyword=keyword, location=location)


@router.get("/{job_id}", response_model=JobResponse)
def get_job_by_id(job_id: str, db: Session = Depends(get_db)):
    enforce(None, Action.GET_JOB)
    return store.require_job(db, job_id)


@router.get("/{job_id}/similar", response_model=list[SimilarJobResponse])
def get_similar_jobs(job_id: str, db: Session = Depends(get_db)):
    """Top five jobs by word overlap with the given job."""
    enforce(None, Action.SIMILAR_JOBS)
    reference = store.require_job(db, job_id)

    return [
        SimilarJobResponse(
            **JobResponse.model_validate(scored.job).model_dump(),
            similarity_score=scored.score,
        )
        for scored in rank(reference, store.list_jobs(db))
    ]


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job(
    job_data: JobCreate,
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    """Post a job for the caller's company."""
    enforce(claims, Action.CREATE_JOB, claims.company_id)
    company = store.require_company(db, claims.company_id)
    return store.create_job(db, company, job_data.model_dump())


@router.put("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: str,
    update: JobUpdate,
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    job = store.require_job(db, job_id)
    enforce(claims, Action.UPDATE_JOB, job)
    return store.update_job(db, job, update.changes())


@router.delete("/{job_id}", response_model=Message)
def delete_job(
    job_id: str,
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    job = store.require_job(db, job_id)
    enforce(claims, Action.DELETE_JOB, job)
    store.delete_job(db, job)
    return Message(msg="Job removed")
