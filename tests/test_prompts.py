"""Tests for prompt templates and prompt assembly."""

import pytest

from app.docanalysis.models import DocumentType
from app.docanalysis.services.prompts import (
    DOCUMENT_SEPARATOR,
    PromptTemplates,
    build_prompt,
    get_prompt_templates,
)


class TestTemplateSelection:
    """Tests for choosing a template from the document-type tag."""

    def test_invoice_tag_selects_invoice_template(self, templates: PromptTemplates):
        """Test that 'rechnung' selects the invoice template."""
        assert templates.select("rechnung") == "INVOICE TEMPLATE"
        assert templates.select(DocumentType.INVOICE.value) == "INVOICE TEMPLATE"

    @pytest.mark.parametrize(
        "doc_type",
        ["auftrag", "", None, "Rechnung", "rechnung ", "invoice", "bestellung"],
    )
    def test_other_tags_select_order_template(
        self, templates: PromptTemplates, doc_type
    ):
        """Test that every other tag falls back to the order template."""
        assert templates.select(doc_type) == "ORDER TEMPLATE"

    def test_templates_are_immutable(self, templates: PromptTemplates):
        """Test that loaded templates cannot be changed."""
        from dataclasses import FrozenInstanceError

        with pytest.raises(FrozenInstanceError):
            templates.invoice = "changed"


class TestBuildPrompt:
    """Tests for prompt assembly."""

    def test_prompt_uses_literal_separator(self):
        """Test prompt is template + separator + text, nothing else."""
        prompt = build_prompt("Extrahiere Felder.", "Seite 1\nSumme 42")
        assert prompt == "Extrahiere Felder.\n\nDokument Inhalt:\nSeite 1\nSumme 42"

    def test_separator_constant(self):
        assert DOCUMENT_SEPARATOR == "\n\nDokument Inhalt:\n"

    def test_empty_document_text(self):
        """Test that empty extracted text still yields the header."""
        assert build_prompt("T", "") == "T\n\nDokument Inhalt:\n"

    def test_long_text_not_truncated(self):
        """Test that no length limit is applied locally."""
        text = "x" * 500_000
        assert build_prompt("T", text).endswith(text)


class TestLoadTemplates:
    """Tests for loading templates from disk."""

    def test_load_from_directory(self, tmp_path):
        """Test loading reads both files verbatim."""
        (tmp_path / "PromptAuftrag.txt").write_text("Auftrag\n", encoding="utf-8")
        (tmp_path / "PromptRechnung.txt").write_text("Rechnung ü\n", encoding="utf-8")

        loaded = PromptTemplates.load(tmp_path)

        assert loaded.order == "Auftrag\n"
        assert loaded.invoice == "Rechnung ü\n"

    def test_missing_file_raises(self, tmp_path):
        """Test that a missing template file is reported at load time."""
        (tmp_path / "PromptAuftrag.txt").write_text("Auftrag", encoding="utf-8")
        with pytest.raises(FileNotFoundError):
            PromptTemplates.load(tmp_path)

    def test_bundled_templates_load(self):
        """Test that the packaged templates exist and differ."""
        bundled = PromptTemplates.load()
        assert "rechnungsNr" in bundled.invoice
        assert "auftragsNr" in bundled.order
        assert bundled.invoice != bundled.order

    def test_bundled_templates_loaded_once(self):
        """Test that the process-wide loader returns the same instance."""
        assert get_prompt_templates() is get_prompt_templates()
