"""
User API endpoints.

Registration and login are public; everything else acts on the caller
identified by the ``x-auth-token`` header.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.api.schemas import (
    JobResponse,
    Message,
    Token,
    UserLogin,
    UserRegister,
    UserResponse,
    UserUpdate,
)
from jobboard.api.v1.auth import get_current_claims
from jobboard.core.errors import InvalidCredentials, UserNotFound
from jobboard.core.security import (
    TokenClaims,
    TokenService,
    get_password_hash,
    get_token_service,
    verify_password,
)
from jobboard.db.session import get_db
from jobboard.models import Role
from jobboard.services import coordinator, store
from jobboard.services.policy import Action, enforce

router = APIRouter()


# ============== Public ==============


@router.post("", response_model=Message)
def register_user(user_data: UserRegister, db: Session = Depends(get_db)):
    """Register a new user. The email must not be taken."""
    store.create_user(
        db,
        name=user_data.name,
        email=user_data.email,
        password=get_password_hash(user_data.password),
        role=user_data.role.value,
        company_id=None,
    )
    return Message(msg="User registered successfully")


@router.post("/login", response_model=Token)
def login_user(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Exchange email and password for a signed token valid for one hour."""
    user = store.get_user_by_email(db, credentials.email)
    if user is None or not verify_password(credentials.password, user.password):
        raise InvalidCredentials()

    claims = TokenClaims(id=user.id, role=Role(user.role), company_id=user.company_id)
    return Token(token=tokens.issue(claims))


# ============== Current user ==============


@router.get("/me", response_model=UserResponse)
def get_current_user_profile(
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    enforce(claims, Action.VIEW_SELF)
    return store.require_user(db, claims.id)


@router.put("/me", response_model=UserResponse)
def update_user_profile(
    update: UserUpdate,
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    """Update name, email or resume. Fields left out stay as they are."""
    enforce(claims, Action.UPDATE_SELF)
    user = store.require_user(db, claims.id)
    return store.update_user(db, user, update.changes())


@router.delete("/me", response_model=Message)
def delete_user(
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    enforce(claims, Action.DELETE_SELF)
    user = store.require_user(db, claims.id)
    store.delete_user(db, user)
    return Message(msg="User deleted")


@router.get("/me/applied-jobs", response_model=list[JobResponse])
def get_user_applied_jobs(
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    """Jobs the caller applied to, in application order, company populated."""
    enforce(claims, Action.LIST_APPLIED)
    user = store.require_user(db, claims.id)
    return store.get_jobs(db, list(user.applied_jobs or []))


@router.put("/jobs/{job_id}/apply", response_model=Message)
def apply_to_job(
    job_id: str,
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    coordinator.apply_to_job(db, claims, job_id)
    return Message(msg="Successfully applied to the job")


@router.delete("/jobs/{job_id}/withdraw", response_model=Message)
def withdraw_application(
    job_id: str,
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    coordinator.withdraw_application(db, claims, job_id)
    return Message(msg="Application withdrawn successfully")


# ============== Other users ==============


@router.get("/{user_id}", response_model=UserResponse)
def get_user_by_id(
    user_id: str,
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    """A user may read their own profile; company accounts may read any."""
    enforce(claims, Action.VIEW_USER, user_id)
    user = store.get_user(db, user_id)
    if user is None:
        raise UserNotFound()
    return user
