"""
Pydantic models for the document analysis service.

Defines the request accepted by the analysis command and the
response envelopes returned by the HTTP surface.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DocumentType(str, Enum):
    """Document-type tags understood by the template selection."""

    ORDER = "auftrag"  # Default for every unrecognized tag
    INVOICE = "rechnung"


class AnalysisRequest(BaseModel):
    """
    Request to analyze a single PDF document.

    Attributes:
        path: Filesystem location of the PDF. Not validated here; a bad
            path surfaces as a pdftotext failure.
        doc_type: Document-type tag. Free-form: "rechnung" selects the
            invoice template, anything else the order template.
    """

    model_config = ConfigDict(populate_by_name=True)

    path: str = Field(
        ...,
        description="Path of the PDF file to analyze",
        examples=["/home/user/Dokumente/rechnung-2024-001.pdf"],
    )
    doc_type: str | None = Field(
        default=None,
        alias="docType",
        description="Document-type tag ('rechnung' or 'auftrag')",
        examples=["rechnung"],
    )


class ErrorResponse(BaseModel):
    """Error returned by the analysis command."""

    detail: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    message: str | None = None
    version: str = Field(default="1.0.0")
