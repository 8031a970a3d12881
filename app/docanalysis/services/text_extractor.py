"""
PDF text extraction using pdftotext (poppler).

Runs the pdftotext command line utility in layout mode and returns
the document text written to standard output.
"""

import logging
import subprocess
from typing import Protocol

try:
    from .exceptions import ExtractionError
except ImportError:
    from services.exceptions import ExtractionError

logger = logging.getLogger(__name__)


class TextExtractor(Protocol):
    """Anything that turns a document path into plain text."""

    def extract(self, path: str) -> str: ...


class PdfToTextExtractor:
    """
    Text extractor backed by the pdftotext binary.

    Uses -layout to keep the visual table structure and -enc UTF-8 for
    correct special characters. The trailing "-" sends output to stdout.
    """

    def __init__(self, binary: str = "pdftotext"):
        """
        Initialize the extractor.

        Args:
            binary: Name or path of the pdftotext executable.
        """
        self.binary = binary

    def build_command(self, path: str) -> list[str]:
        """Return the argument vector for extracting ``path``."""
        return [self.binary, "-layout", "-enc", "UTF-8", path, "-"]

    def extract(self, path: str) -> str:
        """
        Extract the text of a PDF document.

        Args:
            path: Filesystem path of the PDF.

        Returns:
            Extracted text. Invalid UTF-8 sequences are replaced.

        Raises:
            ExtractionError: If pdftotext cannot be started or exits nonzero.
        """
        command = self.build_command(path)
        logger.info("Extracting text from %s", path)

        try:
            result = subprocess.run(command, capture_output=True, check=False)
        except OSError as e:
            logger.error("Could not run %s: %s", self.binary, e)
            raise ExtractionError(f"Could not run pdftotext: {e}") from e

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace")
            logger.error(
                "pdftotext exited with status %d for %s: %s",
                result.returncode,
                path,
                stderr.strip(),
            )
            raise ExtractionError(f"Error reading PDF (pdftotext): {stderr}")

        text = result.stdout.decode("utf-8", errors="replace")
        logger.info("Extracted %d characters from %s", len(text), path)
        return text


# Singleton instance for convenience
_text_extractor: PdfToTextExtractor | None = None


def get_text_extractor() -> PdfToTextExtractor:
    """Get or create the pdftotext extractor singleton."""
    global _text_extractor
    if _text_extractor is None:
        try:
            from ..config import get_settings
        except ImportError:
            from config import get_settings

        _text_extractor = PdfToTextExtractor(binary=get_settings().pdftotext_path)
    return _text_extractor
