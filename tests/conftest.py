"""Shared fixtures: builders for small Office Open XML packages."""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Callable, Sequence

import pytest

REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
OFFICE_REL = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
EXTENDED_NS = "http://schemas.openxmlformats.org/officeDocument/2006/extended-properties"
W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
S_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
P_NS = "http://schemas.openxmlformats.org/presentationml/2006/main"


def _relationships(targets: Sequence[tuple[str, str]]) -> str:
    entries = "".join(
        f'<Relationship Id="rId{index}" Type="{OFFICE_REL}/{kind}" Target="{target}"/>'
        for index, (kind, target) in enumerate(targets, start=1)
    )
    return f'<?xml version="1.0" encoding="UTF-8"?><Relationships xmlns="{REL_NS}">{entries}</Relationships>'


def write_package(path: Path, parts: dict[str, str]) -> Path:
    with zipfile.ZipFile(path, "w") as package:
        for name, content in parts.items():
            package.writestr(name, content)
    return path


def build_docx(path: Path, paragraphs: Sequence[str] = (), *, pages: str | None = None, body: bool = True) -> Path:
    root_targets = [("officeDocument", "word/document.xml")]
    parts: dict[str, str] = {}
    if pages is not None:
        root_targets.append(("extended-properties", "docProps/app.xml"))
        parts["docProps/app.xml"] = (
            f'<Properties xmlns="{EXTENDED_NS}"><Pages>{pages}</Pages></Properties>'
        )
    runs = "".join(f"<w:p><w:r><w:t>{text}</w:t></w:r></w:p>" for text in paragraphs)
    inner = f"<w:body>{runs}</w:body>" if body else ""
    parts["word/document.xml"] = f'<w:document xmlns:w="{W_NS}">{inner}</w:document>'
    parts["_rels/.rels"] = _relationships(root_targets)
    return write_package(path, parts)


def build_xlsx(path: Path, sheets: Sequence[Sequence[int] | None], *, workbook: bool = True) -> Path:
    """Each sheet is a list of cell counts per row; None means no sheet data."""
    parts = {"_rels/.rels": _relationships([("officeDocument", "xl/workbook.xml")])}
    if workbook:
        parts["xl/workbook.xml"] = f'<workbook xmlns="{S_NS}"><sheets/></workbook>'
    parts["xl/_rels/workbook.xml.rels"] = _relationships(
        [("worksheet", f"worksheets/sheet{index}.xml") for index in range(1, len(sheets) + 1)]
    )
    for index, rows in enumerate(sheets, start=1):
        if rows is None:
            content = f'<worksheet xmlns="{S_NS}"/>'
        else:
            row_xml = "".join(
                "<row>" + "<c><v>1</v></c>" * cells + "</row>" for cells in rows
            )
            content = f'<worksheet xmlns="{S_NS}"><sheetData>{row_xml}</sheetData></worksheet>'
        parts[f"xl/worksheets/sheet{index}.xml"] = content
    return write_package(path, parts)


def build_pptx(path: Path, slides: int | None) -> Path:
    if slides is None:
        inner = ""
    else:
        ids = "".join(f'<p:sldId id="{256 + index}"/>' for index in range(slides))
        inner = f"<p:sldIdLst>{ids}</p:sldIdLst>"
    return write_package(
        path,
        {
            "_rels/.rels": _relationships([("officeDocument", "ppt/presentation.xml")]),
            "ppt/presentation.xml": f'<p:presentation xmlns:p="{P_NS}">{inner}</p:presentation>',
        },
    )


@pytest.fixture
def docx_factory(tmp_path: Path) -> Callable[..., Path]:
    def factory(name: str = "doc.docx", *args, **kwargs) -> Path:
        return build_docx(tmp_path / name, *args, **kwargs)

    return factory


@pytest.fixture
def xlsx_factory(tmp_path: Path) -> Callable[..., Path]:
    def factory(name: str, sheets: Sequence[Sequence[int] | None], **kwargs) -> Path:
        return build_xlsx(tmp_path / name, sheets, **kwargs)

    return factory


@pytest.fixture
def pptx_factory(tmp_path: Path) -> Callable[..., Path]:
    def factory(name: str, slides: int | None) -> Path:
        return build_pptx(tmp_path / name, slides)

    return factory


@pytest.fixture
def text_file_factory(tmp_path: Path) -> Callable[[str, int], Path]:
    """Create a file of ``count`` newline-joined lines (no trailing newline)."""

    def factory(name: str, count: int) -> Path:
        path = tmp_path / name
        path.write_text("\n".join(f"line {index}" for index in range(count)))
        return path

    return factory
