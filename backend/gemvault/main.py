"""Main FastAPI application."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from gemvault.config import settings
from gemvault.rate_limiter import limiter
from gemvault.schemas.common import ErrorResponse
from gemvault.services.ownership import OwnershipValidationError

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Gemvault API",
    description="Gemstone certificate verification and ownership history",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add rate limiter to app state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(OwnershipValidationError)
async def ownership_validation_handler(request: Request, exc: OwnershipValidationError):
    """Render ownership date rule violations as per-field 422 errors."""
    logger.info(f"Rejected ownership change on {request.url.path}: {exc}")
    body = ErrorResponse.from_field_errors(
        "Ownership dates are not valid", exc.errors, path=request.url.path
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=body.model_dump(mode="json"),
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Gemvault API", "version": "0.1.0", "status": "running"}


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Import and include routers
from gemvault.routers import auth, gemstones, owners  # noqa: E402

app.include_router(auth.router, prefix="/api")
app.include_router(gemstones.router)
app.include_router(owners.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
