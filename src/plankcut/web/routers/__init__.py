"""API routers for the REST API."""

from plankcut.web.routers.solve import router as solve_router
from plankcut.web.routers.validate import router as validate_router

__all__ = [
    "solve_router",
    "validate_router",
]
