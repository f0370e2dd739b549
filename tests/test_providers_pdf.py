"""Tests for PDF page counting."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import fitz

from pagecounter.models import EstimationSettings
from pagecounter.providers.pdf import PdfPageCountProvider, get_pdf_page_count


class TestGetPdfPageCount:
    """Test get_pdf_page_count function."""

    @patch("pagecounter.providers.pdf.fitz")
    def test_page_count(self, mock_fitz: MagicMock, tmp_path: Path) -> None:
        """Should return the document length and close the document."""
        mock_doc = MagicMock()
        mock_doc.__len__ = MagicMock(return_value=5)
        mock_fitz.open.return_value = mock_doc

        pdf_path = tmp_path / "test.pdf"
        pdf_path.write_bytes(b"dummy")

        assert get_pdf_page_count(pdf_path) == 5
        mock_doc.close.assert_called_once()

    def test_real_document(self, tmp_path: Path) -> None:
        """Should count pages of a PDF written by PyMuPDF."""
        doc = fitz.open()
        for _ in range(3):
            doc.new_page()
        pdf_path = tmp_path / "three.pdf"
        doc.save(str(pdf_path))
        doc.close()

        assert get_pdf_page_count(pdf_path) == 3


class TestPdfPageCountProvider:
    """Test PdfPageCountProvider."""

    def test_can_handle(self) -> None:
        provider = PdfPageCountProvider()

        assert provider.can_handle(Path("doc.pdf"))
        assert provider.can_handle(Path("DOC.PDF"))
        assert not provider.can_handle(Path("doc.txt"))

    @patch("pagecounter.providers.pdf.fitz")
    def test_estimate_success(self, mock_fitz: MagicMock, tmp_path: Path) -> None:
        mock_doc = MagicMock()
        mock_doc.__len__ = MagicMock(return_value=12)
        mock_fitz.open.return_value = mock_doc

        pdf_path = tmp_path / "report.pdf"
        pdf_path.write_bytes(b"dummy")

        result = PdfPageCountProvider().estimate(pdf_path, EstimationSettings())

        assert result.success is True
        assert result.page_count == 12
        assert result.notes == "OK - PDF pages from library"

    @patch("pagecounter.providers.pdf.fitz")
    @patch("pagecounter.providers.pdf.LOGGER")
    def test_estimate_open_error(
        self, mock_logger: MagicMock, mock_fitz: MagicMock, tmp_path: Path
    ) -> None:
        """Should fail without a fallback estimate."""
        mock_fitz.open.side_effect = Exception("Cannot open file")

        pdf_path = tmp_path / "broken.pdf"
        pdf_path.write_bytes(b"dummy")

        result = PdfPageCountProvider().estimate(pdf_path, EstimationSettings())

        assert result.success is False
        assert result.page_count is None
        assert "failed to read PDF" in result.notes
        assert "Cannot open file" in result.notes
        assert mock_logger.warning.called

    def test_estimate_garbage_file(self, tmp_path: Path) -> None:
        """A file that is not a PDF should produce a failed result."""
        pdf_path = tmp_path / "fake.pdf"
        pdf_path.write_bytes(b"this is not a pdf")

        result = PdfPageCountProvider().estimate(pdf_path, EstimationSettings())

        assert result.success is False
        assert result.notes.startswith("Error: failed to read PDF")
