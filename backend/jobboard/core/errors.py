"""
Domain error taxonomy.

Every failure a request can end in is a ``JobBoardError`` subclass with an
HTTP status, a stable ``reason`` code and a client-facing ``msg``. The API
layer renders them as ``{"msg": ..., "reason": ...}``.
"""

from typing import Optional


class JobBoardError(Exception):
    """Base class for all client-facing failures."""

    status_code: int = 400
    reason: str = "error"
    default_msg: str = "Request failed"

    def __init__(self, msg: Optional[str] = None):
        self.msg = msg or self.default_msg
        super().__init__(self.msg)

    def to_dict(self) -> dict:
        return {"msg": self.msg, "reason": self.reason}


# ============== Authentication ==============


class Unauthenticated(JobBoardError):
    status_code = 401
    reason = "unauthenticated"
    default_msg = "No token, authorization denied"


class InvalidToken(JobBoardError):
    status_code = 401
    reason = "invalid_token"
    default_msg = "Token is not valid"


class TokenExpired(InvalidToken):
    reason = "token_expired"


class InvalidCredentials(JobBoardError):
    reason = "invalid_credentials"
    default_msg = "Invalid Credentials"


# ============== Authorization ==============


class Forbidden(JobBoardError):
    """
    Caller is authenticated but may not perform the action.

    ``role_mismatch`` answers 403. ``ownership_mismatch`` answers 401, which
    is what clients of the job endpoints already expect for "not your job".
    """

    ROLE_MISMATCH = "role_mismatch"
    OWNERSHIP_MISMATCH = "ownership_mismatch"

    default_msg = "Not authorized"

    def __init__(self, kind: str = ROLE_MISMATCH, msg: Optional[str] = None):
        self.kind = kind
        self.reason = kind
        self.status_code = 401 if kind == self.OWNERSHIP_MISMATCH else 403
        super().__init__(msg)


# ============== Lookups ==============


class NotFound(JobBoardError):
    status_code = 404
    reason = "not_found"
    entity = "Resource"

    def __init__(self, msg: Optional[str] = None):
        super().__init__(msg or f"{self.entity} not found")


class UserNotFound(NotFound):
    reason = "user_not_found"
    entity = "User"


class CompanyNotFound(NotFound):
    reason = "company_not_found"
    entity = "Company"


class JobNotFound(NotFound):
    reason = "job_not_found"
    entity = "Job"


# ============== Consistency ==============


class DuplicateName(JobBoardError):
    reason = "duplicate_name"
    default_msg = "Company name already exists"


class DuplicateOwnership(JobBoardError):
    reason = "duplicate_ownership"
    default_msg = "You already have a company profile"


class DuplicateEmail(JobBoardError):
    reason = "duplicate_email"
    default_msg = "User already exists"


class AlreadyApplied(JobBoardError):
    reason = "already_applied"
    default_msg = "You have already applied to this job"


class NotApplied(JobBoardError):
    reason = "not_applied"
    default_msg = "You have not applied to this job"


class ValidationFailed(JobBoardError):
    reason = "validation_failed"
    default_msg = "Please include all required fields"

    def __init__(self, errors: Optional[dict[str, str]] = None, msg: Optional[str] = None):
        self.errors = errors or {}
        super().__init__(msg)

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["errors"] = self.errors
        return body


# ============== Backend ==============


class StorageError(JobBoardError):
    """Database failure. The underlying detail is logged, never returned."""

    status_code = 500
    reason = "storage_error"
    default_msg = "Server Error"
