from jobboard.models.user import User, Role
from jobboard.models.company import Company
from jobboard.models.job import Job

__all__ = ["User", "Role", "Company", "Job"]
