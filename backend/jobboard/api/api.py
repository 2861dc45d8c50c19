"""
API Router Aggregator.

Combines the v1 resource routers into a single router for the main app.
"""

from fastapi import APIRouter

from jobboard.api.v1 import companies, jobs, users

api_router = APIRouter()

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["Users"],
)

api_router.include_router(
    companies.router,
    prefix="/companies",
    tags=["Companies"],
)

api_router.include_router(
    jobs.router,
    prefix="/jobs",
    tags=["Jobs"],
)
