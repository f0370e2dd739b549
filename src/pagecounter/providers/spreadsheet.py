"""Spreadsheet page estimates for xlsx workbooks, legacy xls and csv files."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

from pagecounter.models import (
    DEFAULT_COLUMNS_PER_PAGE,
    DEFAULT_LINES_PER_PAGE,
    DEFAULT_ROWS_PER_PAGE,
    EstimationSettings,
    PageCountResult,
    file_extension,
)
from pagecounter.providers.base import ExtensionProvider, size_based_estimate
from pagecounter.utils.ooxml import worksheet_dimensions
from pagecounter.utils.text import ceil_pages, count_raw_lines, positive_or

LOGGER = logging.getLogger(__name__)

SPREADSHEET_EXTENSIONS = ("xls", "xlsx", "csv")
XLS_BYTES_PER_PAGE = 10240


def sheet_pages(rows: int, columns: int, rows_per_page: int, columns_per_page: int) -> int:
    """Pages for one worksheet: row bands times column bands, at least one."""
    row_pages = ceil_pages(rows, rows_per_page)
    col_pages = ceil_pages(columns, columns_per_page)
    return max(1, row_pages * max(1, col_pages))


class SpreadsheetPageCountProvider(ExtensionProvider):
    name = "spreadsheet"
    supported_extensions = SPREADSHEET_EXTENSIONS

    def estimate(self, path: Path, settings: EstimationSettings) -> PageCountResult:
        extension = file_extension(path)
        if extension == "xlsx":
            return self._xlsx_page_count(path, settings)
        if extension == "xls":
            return self._xls_page_count(path)
        if extension == "csv":
            return self._csv_page_count(path, settings)
        return PageCountResult.unsupported()

    def _xlsx_page_count(self, path: Path, settings: EstimationSettings) -> PageCountResult:
        rows_per_page = positive_or(settings.rows_per_page, DEFAULT_ROWS_PER_PAGE)
        columns_per_page = positive_or(settings.columns_per_page, DEFAULT_COLUMNS_PER_PAGE)
        try:
            with zipfile.ZipFile(path) as package:
                sheets = worksheet_dimensions(package)
        except Exception as exc:
            LOGGER.warning("Failed to read XLSX %s: %s", path.name, exc)
            return PageCountResult.failed(f"Error: failed to read XLSX; exception: {exc}")

        if sheets is None:
            return PageCountResult.failed("Error: XLSX workbook part not found")

        total_pages = 0
        details = []
        for number, dimensions in enumerate(sheets, start=1):
            if dimensions is None:
                continue
            rows, columns = dimensions
            total_pages += sheet_pages(rows, columns, rows_per_page, columns_per_page)
            details.append(f"Sheet{number}:{rows}rows")
        total_pages = max(1, total_pages)

        LOGGER.debug(
            "XLSX file %s has %d sheets, estimated %d pages", path.name, len(sheets), total_pages
        )
        return PageCountResult.successful(
            total_pages,
            f"OK - estimated {total_pages} pages across {len(sheets)} sheet(s); "
            f"{', '.join(details)}",
        )

    def _xls_page_count(self, path: Path) -> PageCountResult:
        try:
            result = size_based_estimate(path, XLS_BYTES_PER_PAGE, "XLS")
        except OSError as exc:
            LOGGER.warning("Failed to process XLS %s: %s", path.name, exc)
            return PageCountResult.failed(f"Error: failed to process XLS; exception: {exc}")
        LOGGER.debug("XLS file %s estimated at %d pages", path.name, result.page_count)
        return result

    def _csv_page_count(self, path: Path, settings: EstimationSettings) -> PageCountResult:
        lines_per_page = positive_or(settings.lines_per_page, DEFAULT_LINES_PER_PAGE)
        try:
            line_count = count_raw_lines(path)
        except OSError as exc:
            LOGGER.warning("Failed to read CSV %s: %s", path.name, exc)
            return PageCountResult.failed(f"Error: failed to read CSV; exception: {exc}")

        page_count = max(1, ceil_pages(line_count, lines_per_page))
        LOGGER.debug(
            "CSV file %s has %d lines, estimated %d pages", path.name, line_count, page_count
        )
        return PageCountResult.successful(
            page_count,
            f"OK - estimated pages based on {lines_per_page} lines per page; "
            f"totalLines={line_count}",
        )
