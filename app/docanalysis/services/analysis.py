"""
Document analysis pipeline.

extract text -> select template -> build prompt -> call model -> parse JSON.

Every step either succeeds or raises an AnalysisError subclass; nothing
is retried and no state is kept between calls.
"""

import asyncio
import json
import logging
from functools import lru_cache
from typing import Any, Callable

try:
    from ..config import Credentials, get_settings, resolve_credentials
except ImportError:
    from config import Credentials, get_settings, resolve_credentials

from .completion_client import CompletionClient, MistralCompletionClient
from .exceptions import ParseError
from .prompts import PromptTemplates, build_prompt, get_prompt_templates
from .text_extractor import TextExtractor, get_text_extractor

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Credentials], CompletionClient]


def parse_analysis_result(content: str) -> Any:
    """
    Parse the model's reply into structured data.

    No schema is enforced: whatever JSON the model produced is returned.

    Raises:
        ParseError: If the content is not valid JSON.
    """
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse model output: %s", content[:500])
        raise ParseError(f"JSON parse error: {e}") from e


@lru_cache(maxsize=8)
def _mistral_client(api_key: str, base_url: str, model: str) -> MistralCompletionClient:
    return MistralCompletionClient(api_key=api_key, base_url=base_url, model=model)


def mistral_client_factory(credentials: Credentials) -> MistralCompletionClient:
    """
    Return the Mistral client for the resolved credential.

    Clients are shared per (api_key, base_url, model) so the underlying
    connection pool is reused across calls.
    """
    settings = get_settings()
    return _mistral_client(
        credentials.api_key.get_secret_value(),
        settings.mistral_base_url,
        settings.mistral_model,
    )


class DocumentAnalyzer:
    """
    Turns a PDF path and a document-type tag into structured data.

    Collaborators are injected so tests can replace pdftotext and the
    remote API with fakes.
    """

    def __init__(
        self,
        templates: PromptTemplates,
        extractor: TextExtractor,
        client_factory: ClientFactory = mistral_client_factory,
        credentials_loader: Callable[[], Credentials] = resolve_credentials,
        log_extracted_text: bool = True,
    ):
        self.templates = templates
        self.extractor = extractor
        self.client_factory = client_factory
        self.credentials_loader = credentials_loader
        self.log_extracted_text = log_extracted_text

    async def analyze_document(self, path: str, doc_type: str | None) -> Any:
        """
        Run the full pipeline for one document.

        Args:
            path: Filesystem path of the PDF.
            doc_type: Document-type tag; "rechnung" selects the invoice
                template, anything else the order template.

        Returns:
            The parsed JSON value produced by the model.

        Raises:
            ConfigurationError: Missing API key (raised before extraction).
            ExtractionError: pdftotext failed.
            ApiError, DecodeError, MissingContentError: Remote call failed.
            ParseError: Model output is not valid JSON.
        """
        credentials = self.credentials_loader()

        # pdftotext and the API call block, so they run in worker threads
        extracted_text = await asyncio.to_thread(self.extractor.extract, path)
        if self.log_extracted_text:
            logger.info(
                "Extracted text for %s:\n--- TEXT START ---\n%s\n--- TEXT END ---",
                path,
                extracted_text,
            )

        template = self.templates.select(doc_type)
        prompt = build_prompt(template, extracted_text)
        logger.info(
            "Analyzing %s as %r (prompt=%d chars)", path, doc_type, len(prompt)
        )

        client = self.client_factory(credentials)
        content = await asyncio.to_thread(client.complete, prompt)

        result = parse_analysis_result(content)
        logger.info("Analysis of %s finished", path)
        return result


# Singleton instance for convenience
_document_analyzer: DocumentAnalyzer | None = None


def get_document_analyzer() -> DocumentAnalyzer:
    """Get or create the document analyzer singleton."""
    global _document_analyzer
    if _document_analyzer is None:
        _document_analyzer = DocumentAnalyzer(
            templates=get_prompt_templates(),
            extractor=get_text_extractor(),
            log_extracted_text=get_settings().log_extracted_text,
        )
    return _document_analyzer
