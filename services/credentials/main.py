"""
Credentials Service - Main Application
======================================

FastAPI application for score commitments, verification-gated
authorization and credential minting.

Version: 0.1.0
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blockcreds.config import settings
from blockcreds.logging import get_logger, setup_logging
from blockcreds.minting import get_mint_executor
from blockcreds.models import ErrorResponse, HealthResponse
from blockcreds.zk import HttpArtifactProbe, VerificationDenied
from services.credentials.deps import get_probe
from services.credentials.routes import commitments, mint, networks, verification


# Setup logging
setup_logging(
    log_level=settings.log_level.value,
    json_logs=settings.is_production,
    service_name="credentials",
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    """Application lifespan manager."""
    logger.info(
        "credentials_service_starting",
        environment=settings.environment.value,
        port=settings.credentials_port,
    )

    executor = get_mint_executor()
    await executor.connect()
    logger.info("blockchain_connected", mode=settings.blockchain.mode.value)

    yield

    logger.info("credentials_service_shutting_down")
    await executor.disconnect()

    probe = get_probe()
    if isinstance(probe, HttpArtifactProbe):
        await probe.close()


# Create FastAPI application
app = FastAPI(
    title="BlockCreds Credentials Service",
    description="Private credit proofs and verification-gated credential minting",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins_list,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Health Check Endpoints
# ============================================================================


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """
    Service health check.

    Returns health status of the service and its dependencies.
    """
    components: dict[str, dict[str, Any]] = {
        "blockchain": await get_mint_executor().health_check(),
    }

    all_healthy = all(c.get("status") == "healthy" for c in components.values())

    return HealthResponse(
        status="healthy" if all_healthy else "degraded",
        service="credentials",
        version="0.1.0",
        components=components,
    )


@app.get("/", tags=["Health"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": "BlockCreds Credentials Service",
        "version": "0.1.0",
        "docs": "/docs",
    }


# ============================================================================
# Include Routers
# ============================================================================

app.include_router(
    commitments.router,
    prefix="/api/v1/commitments",
    tags=["Commitments"],
)

app.include_router(
    verification.router,
    prefix="/api/v1/verify",
    tags=["Verification"],
)

app.include_router(
    mint.router,
    prefix="/api/v1/mint",
    tags=["Minting"],
)

app.include_router(
    networks.router,
    prefix="/api/v1/networks",
    tags=["Networks"],
)


# ============================================================================
# Error Handlers
# ============================================================================


@app.exception_handler(VerificationDenied)
async def verification_denied_handler(request: Any, exc: VerificationDenied) -> JSONResponse:
    """A completed verification refused the action."""
    logger.warning(
        "verification_denied",
        reason=exc.reason,
        path=request.url.path,
    )
    body = ErrorResponse(
        error="ZKP verification failed. Threshold not satisfied or mismatch.",
        status_code=status.HTTP_403_FORBIDDEN,
        reason=exc.reason,
    )
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content=body.model_dump(mode="json"),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Any, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
    )
    body = ErrorResponse(error=str(exc.detail), status_code=exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Any, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
    )
    body = ErrorResponse(
        error="Internal server error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(mode="json"),
    )


# ============================================================================
# Run with Uvicorn
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.credentials.main:app",
        host="0.0.0.0",
        port=settings.credentials_port,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )
