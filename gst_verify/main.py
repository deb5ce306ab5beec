"""
FastAPI application for seller GSTIN verification
"""
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable

from .config import settings, validate_configuration
from .api import gst
from .models.responses import ErrorResponse, HealthResponse

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        logger.info(f"Request: {request.method} {request.url.path}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(f"Response: {response.status_code} - {process_time:.3f}s")

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Starting GST Verification Service...")

    try:
        validate_configuration()
        logger.info("Configuration validated")
    except ValueError as e:
        logger.error(f"Failed to start GST Verification Service: {e}")
        raise

    yield

    logger.info("Shutting down GST Verification Service...")


# Create FastAPI app
app = FastAPI(
    title="GST Verification Service",
    description="GSTIN validation and registration lookup for seller onboarding",
    version=settings.API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.add_middleware(LoggingMiddleware)

if settings.ENABLE_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

app.include_router(gst.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    body = ErrorResponse(
        message="Internal server error",
        error_code="INTERNAL_ERROR",
        details={"error": str(exc)} if settings.DEBUG else None,
    )
    return JSONResponse(status_code=500, content=body.model_dump(mode="json"))


@app.get("/")
async def root():
    return {
        "message": "GST Verification Service",
        "version": settings.API_VERSION,
        "status": "running",
    }


@app.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(
        status="healthy",
        timestamp=datetime.utcnow(),
        version=settings.API_VERSION,
        environment=settings.ENVIRONMENT,
        checks={
            "gst_verification": "enabled" if settings.GST_VERIFICATION_ENABLED else "disabled",
            "gst_provider": "configured" if settings.gst_provider_key else "not_configured",
        },
    )
