"""FastAPI REST API for cutting plans.

Usage:
    uvicorn plankcut.web:app --reload
"""

from plankcut.web.app import app, create_app

__all__ = ["app", "create_app"]
