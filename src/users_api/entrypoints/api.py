from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from users_api.entrypoints.negotiation import render
from users_api.entrypoints.routers import users
from users_api.services.config import settings
from users_api.services.validation import ModelErrors, ValidationFailed

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    return Response(status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def validation_failed_handler(request: Request, exc: ValidationFailed) -> Response:
    return render(request, exc.errors, root="Errors", status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    errors = ModelErrors()
    for error in exc.errors():
        location = list(error.get("loc", ()))[1:]
        if error.get("type") == "json_invalid" or not location:
            logger.info("malformed request body for %s %s", request.method, request.url.path)
            return Response(status_code=status.HTTP_400_BAD_REQUEST)
        errors.add(str(location[-1]), error.get("msg", "Invalid value"))
    return render(request, errors.as_dict(), root="Errors", status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)


class API(FastAPI):
    def __init__(self) -> None:
        super().__init__(title="Users API")

        self.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.USERS_API_CORS_ORIGINS),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["Location", "X-Pagination", "Allow"],
        )
        self.add_exception_handler(StarletteHTTPException, http_exception_handler)
        self.add_exception_handler(ValidationFailed, validation_failed_handler)
        self.add_exception_handler(RequestValidationError, request_validation_handler)

        @self.get("/health")
        async def health() -> dict[str, str]:
            return {"status": "ok"}


def create_app() -> API:
    application = API()
    application.include_router(users.router, prefix=settings.USERS_API_URL_PREFIX)
    return application


app = create_app()


def run() -> None:
    uvicorn.run(
        "users_api.entrypoints.api:app",
        host=settings.USERS_API_HOST,
        port=settings.USERS_API_PORT,
        log_level="debug" if settings.DEBUG else "info",
    )
