"""
Security Check Funnel API - Main Application.

FastAPI application with CORS enabled for the funnel and admin frontends.
Every /api response uses the envelope `{success, data?, error?}`.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import __version__
from repositories.client import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI application
app = FastAPI(
    title="Security Check Funnel API",
    description="REST API for the security maturity check and its lead review dashboard",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allow_origins),
    allow_credentials=False,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Admin-Password"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Body problems (unparseable JSON, not an object) share one generic message.
    in_body = any(error.get("loc", ("",))[0] == "body" for error in exc.errors())
    message = "Invalid JSON body" if in_body else "Invalid request parameters"
    return JSONResponse(status_code=400, content={"success": False, "error": message})


@app.get("/health", tags=["Health"])
def health_check():
    """
    Health check endpoint.

    Returns the API status and version.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "service": "security-check-funnel-api"
    }


@app.get("/", tags=["Root"])
def root():
    """
    Root endpoint with API information.
    """
    return {
        "message": "Security Check Funnel API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


# Import and include routers
from api.routers import leads, quiz  # noqa: E402

app.include_router(leads.router, prefix="/api", tags=["Leads"])
app.include_router(quiz.router, prefix="/api", tags=["Quiz"])
