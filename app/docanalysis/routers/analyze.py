"""
Router for the document analysis command.

Handles:
- Analyzing a PDF on the local filesystem into structured data
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

# Handle both package imports and standalone imports
try:
    from ..models import AnalysisRequest, ErrorResponse
    from ..services.analysis import DocumentAnalyzer, get_document_analyzer
    from ..services.exceptions import AnalysisError
except ImportError:
    from models import AnalysisRequest, ErrorResponse
    from services.analysis import DocumentAnalyzer, get_document_analyzer
    from services.exceptions import AnalysisError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["analysis"])


@router.post(
    "/analyze-document",
    responses={
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def analyze_document(
    request: AnalysisRequest,
    analyzer: DocumentAnalyzer = Depends(get_document_analyzer),
) -> Any:
    """
    Analyze a PDF document.

    Extracts the text with pdftotext, applies the template for the
    document type and returns the JSON produced by the model.
    Pipeline errors are turned into {"detail": message} by the
    application's exception handlers.
    """
    logger.info("Analyze request: path=%s doc_type=%r", request.path, request.doc_type)

    try:
        return await analyzer.analyze_document(request.path, request.doc_type)
    except AnalysisError:
        raise
    except Exception as e:
        logger.exception("Unexpected error analyzing %s", request.path)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal error: {e}",
        )
