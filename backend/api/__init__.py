"""FastAPI HTTP layer package.

Public re-export so the service can be started with::

    uvicorn backend.api:app --reload
"""

from backend.api.app import app

__all__ = ["app"]
