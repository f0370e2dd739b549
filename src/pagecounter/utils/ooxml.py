"""Minimal readers for Office Open XML packages (docx, xlsx, pptx).

Only the parts needed for page estimation are parsed: the package and part
relationships, extended properties, and the main document parts.
"""

from __future__ import annotations

import posixpath
import xml.etree.ElementTree as ET
import zipfile

REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
OFFICE_DOCUMENT_REL = "/officeDocument"
EXTENDED_PROPERTIES_REL = "/extended-properties"
WORKSHEET_REL = "/worksheet"

EXTENDED_PROPERTIES_NS = (
    "http://schemas.openxmlformats.org/officeDocument/2006/extended-properties"
)
WORDPROCESSING_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
SPREADSHEET_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
PRESENTATION_NS = "http://schemas.openxmlformats.org/presentationml/2006/main"


def _rels_name(part_name: str) -> str:
    directory, name = posixpath.split(part_name)
    return posixpath.join(directory, "_rels", f"{name}.rels")


def _resolve_target(source_part: str, target: str) -> str:
    if target.startswith("/"):
        return target.lstrip("/")
    base = posixpath.dirname(source_part)
    return posixpath.normpath(posixpath.join(base, target))


def read_part(package: zipfile.ZipFile, part_name: str) -> ET.Element | None:
    """Parse a package part, or return None when the part does not exist."""
    try:
        data = package.read(part_name)
    except KeyError:
        return None
    return ET.fromstring(data)


def related_parts(package: zipfile.ZipFile, source_part: str, type_suffix: str) -> list[str]:
    """Return part names related to ``source_part`` by a relationship type.

    An empty ``source_part`` addresses the package-level relationships.
    Targets keep the order in which the relationships are declared.
    """
    rels_name = "_rels/.rels" if not source_part else _rels_name(source_part)
    root = read_part(package, rels_name)
    if root is None:
        return []
    parts = []
    for rel in root.iter(f"{{{REL_NS}}}Relationship"):
        if rel.get("TargetMode") == "External":
            continue
        if (rel.get("Type") or "").endswith(type_suffix):
            parts.append(_resolve_target(source_part, rel.get("Target", "")))
    return parts


def main_document_part(package: zipfile.ZipFile) -> str | None:
    parts = related_parts(package, "", OFFICE_DOCUMENT_REL)
    return parts[0] if parts else None


def extended_page_count(package: zipfile.ZipFile) -> int | None:
    """Read ``<Pages>`` from the extended properties, if present and numeric."""
    for part_name in related_parts(package, "", EXTENDED_PROPERTIES_REL):
        root = read_part(package, part_name)
        if root is None:
            continue
        pages = root.find(f"{{{EXTENDED_PROPERTIES_NS}}}Pages")
        if pages is not None and pages.text and pages.text.strip().isdigit():
            return int(pages.text.strip())
    return None


def document_body_text(package: zipfile.ZipFile) -> str | None:
    """Concatenated run text of a word-processing body, or None without a body."""
    part_name = main_document_part(package)
    if part_name is None:
        return None
    document = read_part(package, part_name)
    if document is None:
        return None
    body = document.find(f"{{{WORDPROCESSING_NS}}}body")
    if body is None:
        return None
    return "".join(node.text or "" for node in body.iter(f"{{{WORDPROCESSING_NS}}}t"))


def worksheet_dimensions(package: zipfile.ZipFile) -> list[tuple[int, int] | None] | None:
    """Return ``(row_count, max_cells_in_a_row)`` for every worksheet.

    Returns None when the package has no workbook part. Worksheets without
    sheet data are reported as None so callers can still count them.
    """
    workbook = main_document_part(package)
    if workbook is None or workbook not in package.namelist():
        return None

    sheets: list[tuple[int, int] | None] = []
    for part_name in related_parts(package, workbook, WORKSHEET_REL):
        worksheet = read_part(package, part_name)
        sheet_data = None if worksheet is None else worksheet.find(f"{{{SPREADSHEET_NS}}}sheetData")
        if sheet_data is None:
            sheets.append(None)
            continue
        rows = sheet_data.findall(f"{{{SPREADSHEET_NS}}}row")
        max_columns = max((len(row.findall(f"{{{SPREADSHEET_NS}}}c")) for row in rows), default=0)
        sheets.append((len(rows), max_columns))
    return sheets


def slide_count(package: zipfile.ZipFile) -> int | None:
    """Number of entries in the presentation's slide id list, or None without one."""
    part_name = main_document_part(package)
    if part_name is None:
        return None
    presentation = read_part(package, part_name)
    if presentation is None:
        return None
    slide_ids = presentation.find(f"{{{PRESENTATION_NS}}}sldIdLst")
    if slide_ids is None:
        return None
    return len(slide_ids.findall(f"{{{PRESENTATION_NS}}}sldId"))
