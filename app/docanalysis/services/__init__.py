"""
Services package for the document analysis backend.

Contains:
- text_extractor: pdftotext wrapper
- prompts: bundled instruction templates
- completion_client: Mistral chat completion client
- analysis: the analysis pipeline (imported directly, it depends on config)
"""

from .completion_client import MistralCompletionClient
from .exceptions import AnalysisError
from .prompts import PromptTemplates
from .text_extractor import PdfToTextExtractor

__all__ = [
    "AnalysisError",
    "MistralCompletionClient",
    "PdfToTextExtractor",
    "PromptTemplates",
]
