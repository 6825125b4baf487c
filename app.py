"""
App assembly entry point.

Re-exports the FastAPI `app` from `record_collection.api.main` so servers can
be pointed at ``app:app``.
"""

from record_collection.api.main import app  # noqa: F401
