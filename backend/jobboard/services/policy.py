"""
Authorization policy.

``authorize`` is a pure decision over the caller's token claims and the
target resource; it never touches the database. Handlers call ``enforce``,
which turns a ``Deny`` into the matching domain error.
"""

import enum
from dataclasses import dataclass
from typing import Any, Optional, Union

from jobboard.core.errors import DuplicateOwnership, Forbidden, JobBoardError, Unauthenticated
from jobboard.core.security import TokenClaims
from jobboard.models import Role


class Action(str, enum.Enum):
    # Public
    LIST_JOBS = "list_jobs"
    SEARCH_JOBS = "search_jobs"
    GET_JOB = "get_job"
    SIMILAR_JOBS = "similar_jobs"
    LIST_COMPANIES = "list_companies"
    GET_COMPANY = "get_company"
    LIST_COMPANY_JOBS = "list_company_jobs"

    # Private
    CREATE_COMPANY = "create_company"
    MANAGE_COMPANY = "manage_company"
    CREATE_JOB = "create_job"
    UPDATE_JOB = "update_job"
    DELETE_JOB = "delete_job"
    VIEW_USER = "view_user"
    VIEW_SELF = "view_self"
    UPDATE_SELF = "update_self"
    DELETE_SELF = "delete_self"
    APPLY = "apply"
    WITHDRAW = "withdraw"
    LIST_APPLIED = "list_applied"


PUBLIC_ACTIONS = frozenset({
    Action.LIST_JOBS,
    Action.SEARCH_JOBS,
    Action.GET_JOB,
    Action.SIMILAR_JOBS,
    Action.LIST_COMPANIES,
    Action.GET_COMPANY,
    Action.LIST_COMPANY_JOBS,
})

SELF_ACTIONS = frozenset({
    Action.MANAGE_COMPANY,
    Action.VIEW_SELF,
    Action.UPDATE_SELF,
    Action.DELETE_SELF,
    Action.APPLY,
    Action.WITHDRAW,
    Action.LIST_APPLIED,
})

JOB_ACTIONS = frozenset({Action.CREATE_JOB, Action.UPDATE_JOB, Action.DELETE_JOB})


class DenyReason(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    ROLE_MISMATCH = "role_mismatch"
    OWNERSHIP_MISMATCH = "ownership_mismatch"
    DUPLICATE_OWNERSHIP = "duplicate_ownership"


@dataclass(frozen=True)
class Allow:
    allowed = True


@dataclass(frozen=True)
class Deny:
    reason: DenyReason
    msg: str = "Not authorized"
    allowed = False


Decision = Union[Allow, Deny]

ALLOW = Allow()


def _company_id_of(resource: Any) -> Optional[str]:
    """Company id a job action targets: a Job, a Company, or a bare id."""
    if resource is None:
        return None
    if isinstance(resource, str):
        return resource
    # Job rows carry company_id, Company rows carry id
    if hasattr(resource, "company_id"):
        return resource.company_id
    return getattr(resource, "id", None)


def authorize(claims: Optional[TokenClaims], action: Action, resource: Any = None) -> Decision:
    """
    Decide whether ``claims`` may perform ``action`` on ``resource``.

    Rules, first match wins:
        1. public actions are always allowed
        2. no claims -> unauthenticated
        3. create company: role ``company`` and no company already claimed
        4. job writes: role ``company`` and the job's company id equals
           ``claims.company_id``
        5. view user: the user themselves or any ``company`` account
        6. self actions: any authenticated caller
    """
    if action in PUBLIC_ACTIONS:
        return ALLOW

    if claims is None:
        return Deny(DenyReason.UNAUTHENTICATED, "No token, authorization denied")

    if action == Action.CREATE_COMPANY:
        if claims.role != Role.COMPANY:
            return Deny(DenyReason.ROLE_MISMATCH, "Only companies can create companies")
        if claims.company_id:
            return Deny(DenyReason.DUPLICATE_OWNERSHIP, "You already have a company profile")
        return ALLOW

    if action in JOB_ACTIONS:
        if claims.role != Role.COMPANY or not claims.company_id:
            return Deny(DenyReason.ROLE_MISMATCH, "Only companies can manage jobs")
        target = _company_id_of(resource)
        if target is None or str(target) != str(claims.company_id):
            verb = action.value.split("_")[0]
            return Deny(DenyReason.OWNERSHIP_MISMATCH, f"Not authorized to {verb} this job")
        return ALLOW

    if action == Action.VIEW_USER:
        target_id = resource if isinstance(resource, str) else getattr(resource, "id", None)
        if claims.role == Role.COMPANY or str(target_id) == str(claims.id):
            return ALLOW
        return Deny(DenyReason.ROLE_MISMATCH, "Not authorized to view this profile")

    if action in SELF_ACTIONS:
        return ALLOW

    raise ValueError(f"Unknown action: {action}")


def to_error(decision: Deny) -> JobBoardError:
    if decision.reason == DenyReason.UNAUTHENTICATED:
        return Unauthenticated(decision.msg)
    if decision.reason == DenyReason.DUPLICATE_OWNERSHIP:
        return DuplicateOwnership(decision.msg)
    if decision.reason == DenyReason.OWNERSHIP_MISMATCH:
        return Forbidden(Forbidden.OWNERSHIP_MISMATCH, decision.msg)
    return Forbidden(Forbidden.ROLE_MISMATCH, decision.msg)


def enforce(claims: Optional[TokenClaims], action: Action, resource: Any = None) -> None:
    """Raise the domain error for a denied action; return quietly otherwise."""
    decision = authorize(claims, action, resource)
    if isinstance(decision, Deny):
        raise to_error(decision)
