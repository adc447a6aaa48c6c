"""FastAPI REST API for panel nesting.

Usage:
    uvicorn cabinet_nesting.web:app --reload
"""

from cabinet_nesting.web.app import app, create_app

__all__ = ["app", "create_app"]
