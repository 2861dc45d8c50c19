from jobboard.services.coordinator import (
    CompanyCreated,
    apply_to_job,
    create_company,
    withdraw_application,
)
from jobboard.services.policy import Action, authorize, enforce
from jobboard.services.similarity import ScoredJob, rank

__all__ = [
    "CompanyCreated",
    "create_company",
    "apply_to_job",
    "withdraw_application",
    "Action",
    "authorize",
    "enforce",
    "ScoredJob",
    "rank",
]
