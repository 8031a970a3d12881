"""
Instruction templates for document analysis.

The two templates ship inside the package (prompts/*.txt), are read once
at startup and are never reloaded while the process runs.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

try:
    from ..models import DocumentType
except ImportError:
    from models import DocumentType

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"
ORDER_TEMPLATE_FILE = "PromptAuftrag.txt"
INVOICE_TEMPLATE_FILE = "PromptRechnung.txt"

# Literal header between the instructions and the extracted document text
DOCUMENT_SEPARATOR = "\n\nDokument Inhalt:\n"


@dataclass(frozen=True)
class PromptTemplates:
    """Immutable pair of instruction templates."""

    order: str
    invoice: str

    @classmethod
    def load(cls, directory: Path | str | None = None) -> "PromptTemplates":
        """
        Read both templates from disk.

        Args:
            directory: Directory holding the template files. Defaults to
                the bundled prompts directory.

        Returns:
            PromptTemplates with the file contents, unmodified.
        """
        base = Path(directory) if directory is not None else PROMPTS_DIR
        order = (base / ORDER_TEMPLATE_FILE).read_text(encoding="utf-8")
        invoice = (base / INVOICE_TEMPLATE_FILE).read_text(encoding="utf-8")
        logger.info("Loaded prompt templates from %s", base)
        return cls(order=order, invoice=invoice)

    def select(self, doc_type: str | None) -> str:
        """
        Pick the template for a document-type tag.

        Only an exact "rechnung" selects the invoice template. Every other
        value, including empty, None or misspelled tags, gets the order
        template.
        """
        if doc_type == DocumentType.INVOICE.value:
            return self.invoice
        return self.order


def build_prompt(template: str, document_text: str) -> str:
    """Join template and extracted text into the prompt sent to the model."""
    return f"{template}{DOCUMENT_SEPARATOR}{document_text}"


@lru_cache
def get_prompt_templates() -> PromptTemplates:
    """Load the bundled templates once per process."""
    return PromptTemplates.load()
