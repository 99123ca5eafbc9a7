"""
SerenSpace FastAPI Application

Main entry point for the SerenSpace API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

# Common library imports
from common.database import MongoDB
from common.utils import success_response, error_response

# App-specific imports
from serenspace import __version__
from serenspace.config import settings

# Import routers
from serenspace.routers import (
    moods_router,
    insights_router,
    posts_router,
    tools_router,
    profile_router,
)

# Import service initialization
from serenspace.dependencies import init_all_services


logging.basicConfig(
    level=settings.get_log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# =============================================================================
# Database Instance
# =============================================================================
main_db = MongoDB()


# =============================================================================
# Application Lifespan
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Connects to MongoDB and wires services on startup; disconnects on shutdown.
    """
    logger.info("Starting SerenSpace API...")

    await main_db.connect(
        uri=settings.MONGODB_URI,
        database_name=settings.MONGODB_DATABASE,
    )

    init_all_services(
        db=main_db.db,
        firebase_credentials_path=settings.FIREBASE_CREDENTIALS_PATH,
        firebase_project_id=settings.FIREBASE_PROJECT_ID,
    )
    logger.info(f"SerenSpace API started ({settings.ENVIRONMENT})")

    yield

    logger.info("Shutting down SerenSpace API...")
    await main_db.disconnect()


# =============================================================================
# FastAPI Application
# =============================================================================
app = FastAPI(
    title="SerenSpace API",
    description="Mental wellness journaling backend",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.is_development() else None,
    redoc_url="/redoc" if settings.is_development() else None,
)

# =============================================================================
# CORS Middleware
# =============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Error Handlers
# =============================================================================
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors (including APIException) in the standard envelope."""
    if isinstance(exc.detail, dict):
        body = error_response(
            exc.detail.get("message", "Request failed"),
            code=exc.detail.get("code"),
            details=exc.detail.get("details"),
        )
    else:
        body = error_response(str(exc.detail))

    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(p) for p in e["loc"][1:]), "message": e["msg"]}
        for e in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=error_response("Validation error", code="VALIDATION_ERROR", details={"errors": errors}),
    )


@app.exception_handler(PyMongoError)
async def store_error_handler(request: Request, exc: PyMongoError):
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content=error_response("Operation failed", code="STORE_UNAVAILABLE"),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=error_response("Operation failed", code="INTERNAL_ERROR"),
    )


# =============================================================================
# Include Routers (all under /api prefix)
# =============================================================================
API_PREFIX = "/api"

app.include_router(moods_router, prefix=API_PREFIX, tags=["Moods"])
app.include_router(insights_router, prefix=API_PREFIX, tags=["Insights"])
app.include_router(posts_router, prefix=API_PREFIX, tags=["Community"])
app.include_router(tools_router, prefix=API_PREFIX, tags=["Coping Tools"])
app.include_router(profile_router, prefix=API_PREFIX, tags=["Profile"])


# =============================================================================
# Root & Health Check Endpoints
# =============================================================================
@app.get("/", tags=["Health"])
async def root():
    return success_response({
        "name": "SerenSpace API",
        "version": __version__,
        "endpoints": {
            "moods": f"{API_PREFIX}/moods",
            "insights": f"{API_PREFIX}/insights",
            "posts": f"{API_PREFIX}/posts",
            "tools": f"{API_PREFIX}/tools",
            "profile": f"{API_PREFIX}/profile",
            "health": "/health",
        },
    })


@app.get("/health", tags=["Health"])
async def health():
    """
    Health check endpoint.

    Returns the status of the API and database connection.
    """
    return success_response({
        "status": "ok",
        "version": __version__,
        "database": main_db.is_connected,
    })


# =============================================================================
# Run with Uvicorn
# =============================================================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )
