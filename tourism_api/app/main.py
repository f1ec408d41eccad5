"""
Main entrypoint for the Tourism Marketplace API.

This module assembles the FastAPI application, sets up logging, CORS,
error handlers and static file serving, and includes the versioned
routers.  The ``create_app`` function builds and configures the app,
which is then instantiated at module import time as ``app``::

    uvicorn tourism_api.app.main:app --reload

Every error leaves the API as ``{"message": ...}`` with a matching
status code.  Store failures are logged with their traceback and
reported to the client as a generic 500.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.db import close_client, get_database, init_db
from .core.logging_config import setup_logging
from .core.storage import FileStorage
from .api.v1.router import router as v1_router


logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the handlers below
    # can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)

    origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(v1_router, prefix="/api/v1")

    storage = FileStorage()
    storage.ensure_directory()
    app.mount("/uploads", StaticFiles(directory=str(storage.directory)), name="uploads")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # The rejected input is not echoed back; it may be NaN, which JSON cannot carry.
        errors = [
            {key: value for key, value in error.items() if key not in ("input", "ctx")}
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "validation error", "errors": jsonable_encoder(errors)},
        )

    @app.exception_handler(PyMongoError)
    async def store_exception_handler(request: Request, exc: PyMongoError) -> JSONResponse:
        logger.exception("Store error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "internal server error"},
        )

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {"message": "server running properly"}

    @app.on_event("startup")
    async def startup_event() -> None:
        await init_db(get_database())

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        close_client()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
