"""
FieldScope API - FastAPI Application
====================================
RESTful API for field definition resources.

Features:
- Field definition documents per entity type
- Typo-aware field name suggestions
- Access path validation
- Dynamic field registration
- Resource cache management
"""

import os
import sys
import logging
from pathlib import Path
from datetime import datetime
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

# Add api directory to path for router imports
api_dir = Path(__file__).parent
sys.path.insert(0, str(api_dir))

from fieldscope import __version__

# Import routers
from routers import fields

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    handler = fields.get_handler()
    logger.info(f"FieldScope API starting up ({len(handler.list_resources())} resources)")

    yield

    # Shutdown
    logger.info("FieldScope API shutting down...")
    fields.get_handler().shutdown()
    fields.set_handler(None)


# Create FastAPI app
app = FastAPI(
    title="FieldScope API",
    description="""
## FieldScope - REST API

FieldScope serves field definitions for issue-tracker entities:
- **Fields**: Static definitions fused with discovered custom fields
- **Suggestions**: Typo-aware field name suggestions
- **Validation**: Access path checks with "did you mean" hints
- **Cache**: Resource cache statistics and invalidation
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)


# ============================================
# Include Routers
# ============================================

app.include_router(
    fields.router,
    prefix="/api/v1/fields",
    tags=["Fields"]
)


# ============================================
# Root Endpoints
# ============================================

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "service": "FieldScope API",
        "version": __version__,
        "docs": "/docs",
        "redoc": "/redoc",
        "health": "/health",
        "api_base": "/api/v1"
    }


@app.get("/health", tags=["Root"])
async def health():
    """Simple health check endpoint at root level."""
    return {"status": "healthy", "service": "fieldscope-api"}


@app.get("/api/v1", tags=["Root"])
async def api_root():
    """API v1 root endpoint."""
    return {
        "version": __version__,
        "endpoints": {
            "fields": "/api/v1/fields",
        }
    }


# ============================================
# Global Exception Handler
# ============================================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled error on {request.url}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": {
                "code": "INTERNAL_ERROR",
                "message": str(exc)
            },
            "meta": {
                "timestamp": datetime.now().isoformat(),
                "path": str(request.url)
            }
        }
    )


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=int(os.getenv("API_PORT", 8000)),
        reload=os.getenv("API_RELOAD", "false").lower() == "true"
    )
