"""Main FastAPI application module.

This module initializes the FastAPI application, registers the route
handlers, and owns the single mapping from service errors to HTTP responses.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.logging_config import (
    REQUEST_ID_HEADER,
    bind_request_id,
    get_request_id,
    reset_request_id,
    setup_logging,
)
from config import (
    CORS_ALLOWED_ORIGINS,
    API_HOST,
    API_PORT,
)
from core.database import init_db
from core.dependencies import get_token_provider
from core.exceptions import ItsError
from api.routes import auth, content, courses, topics, users

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Fail fast on a missing or weak signing secret
get_token_provider()

# Initialize FastAPI application
app = FastAPI(
    title="ITS Backend API",
    description="Backend API service for the intelligent tutoring system.",
    version="1.0.0",
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)


@app.middleware("http")
async def correlation_id_middleware(request: Request, call_next):
    """Tag the request, its log records and its response with a correlation id.

    Unhandled errors are rendered here rather than in an exception handler so
    the id is still bound while they are logged and answered.
    """
    token = bind_request_id(request.headers.get(REQUEST_ID_HEADER))
    try:
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            response = JSONResponse(
                status_code=500,
                content={"detail": "Internal server error", "requestId": get_request_id()},
            )
        response.headers[REQUEST_ID_HEADER] = get_request_id()
        return response
    finally:
        reset_request_id(token)


@app.exception_handler(ItsError)
async def its_error_handler(request: Request, exc: ItsError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": "Internal server error", "requestId": get_request_id()},
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = []
    for error in exc.errors():
        # ("body", "email") -> "email"
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append({"field": ".".join(location), "message": message})
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation failed", "errors": errors},
    )


# Register route handlers
app.include_router(auth.router)
app.include_router(content.router)
app.include_router(courses.router)
app.include_router(topics.router)
app.include_router(users.router)


@app.on_event("startup")
def startup_tasks() -> None:
    """Create collections and indexes that do not exist yet."""
    init_db()
    logger.info("ITS backend started")


@app.get("/", summary="API root", tags=["Info"])
def root() -> dict:
    """API root path, returns API information and documentation links.

    Returns:
        Dictionary with API information and documentation links.
    """
    return {
        "name": "ITS Backend API",
        "version": "1.0.0",
        "description": "Backend API service for the intelligent tutoring system.",
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc",
        },
        "health": "/health",
    }


@app.get("/health", summary="Health check", tags=["Health"])
def health() -> dict:
    """Health check endpoint.

    Returns:
        Dictionary with status "ok".
    """
    return {"status": "ok"}


# --- Startup code for direct execution ---
if __name__ == "__main__":
    import uvicorn

    server_url = f"http://{API_HOST}:{API_PORT}"
    logger.info("Serving ITS backend at %s (docs at %s/docs)", server_url, server_url)
    uvicorn.run("app:app", host=API_HOST, port=API_PORT, reload=True)
