"""
Document Analysis Backend.

Local service behind the desktop PDF tool: extracts text from PDF
documents with pdftotext and turns it into structured data using
the Mistral chat completion API.
"""

__version__ = "1.0.0"
