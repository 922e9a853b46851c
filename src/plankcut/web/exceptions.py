"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from plankcut.application.config import ConfigError


class CutPlanError(Exception):
    """Raised when a cutting plan cannot be produced."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Planning failed: {errors}")


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(CutPlanError)
    async def cut_plan_error_handler(
        request: Request, exc: CutPlanError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": "Planning failed",
                "error_type": "plan_failed",
                "details": exc.errors,
            },
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(
        request: Request, exc: ConfigError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": exc.error_type,
                "details": [
                    {"path": d.get("path"), "message": d.get("message")}
                    for d in exc.details
                ],
            },
        )
