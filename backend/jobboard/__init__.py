"""Job board backend: users, companies and jobs behind a token-guarded REST API."""

__version__ = "1.0.0"
