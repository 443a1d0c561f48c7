"""
FastAPI application entry point for the admin API.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from admin_api.config import get_settings
from admin_api.errors import describe_validation_errors
from admin_api.routes import router

INVALID_REQUEST = "Invalid request"


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "error": INVALID_REQUEST,
            "details": describe_validation_errors(exc.errors()),
        },
    )


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Chat Admin API", version="0.1.0")
    app.include_router(router, prefix=settings.api_prefix)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    return app


app = create_app()
