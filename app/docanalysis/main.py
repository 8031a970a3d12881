"""
FastAPI application for the document analysis service.

Provides endpoints for:
- Health checks
- Analyzing a PDF (invoice or order) into structured data
"""

import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Handle both package imports (when running as module) and standalone imports (uvicorn main:app)
try:
    from .config import get_settings
    from .models import HealthResponse
    from .routers import analyze
    from .services.analysis import get_document_analyzer
    from .services.exceptions import (
        AnalysisError,
        ConfigurationError,
        ExtractionError,
    )
    from .services.prompts import get_prompt_templates
except ImportError:
    import sys
    from pathlib import Path
    # Add parent directory to path for standalone imports
    backend_dir = Path(__file__).parent
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))
    from config import get_settings
    from models import HealthResponse
    from routers import analyze
    from services.analysis import get_document_analyzer
    from services.exceptions import (
        AnalysisError,
        ConfigurationError,
        ExtractionError,
    )
    from services.prompts import get_prompt_templates

# Configure logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting Document Analysis Service...")
    # Templates are read once here and stay fixed for the process lifetime
    get_prompt_templates()
    get_document_analyzer()
    logger.info("Services initialized successfully")
    yield
    logger.info("Shutting down Document Analysis Service...")


# Create FastAPI application
app = FastAPI(
    title="Document Analysis API",
    description="Invoice and order analysis for PDF documents using pdftotext and Mistral",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS for the desktop webview and the Vite dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "tauri://localhost",
        "http://tauri.localhost",
        "http://localhost:1420",  # Vite development server
        "http://127.0.0.1:1420",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Endpoints
# =============================================================================


@app.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """Root endpoint - health check."""
    return HealthResponse(
        status="healthy",
        message="Document Analysis API is running",
    )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", message="Service is healthy")


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(analyze.router)


# =============================================================================
# Exception Handlers
# =============================================================================


def error_status_code(exc: AnalysisError) -> int:
    """Map a pipeline error to the HTTP status returned to the caller."""
    if isinstance(exc, ConfigurationError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    if isinstance(exc, ExtractionError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    # Remote API and model output failures
    return status.HTTP_502_BAD_GATEWAY


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError):
    """Handle document analysis errors."""
    logger.warning("Analysis failed (%s): %s", type(exc).__name__, exc)
    return JSONResponse(
        status_code=error_status_code(exc),
        content={"detail": str(exc)},
    )
