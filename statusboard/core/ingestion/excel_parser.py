"""Weekly status workbook ingestion.

Turns the first worksheet of a weekly status workbook into
``NormalizedReport`` records.  Header names vary between teams, so each
field is located through ``COLUMN_SYNONYMS``; health cells go through
``normalize_health``.

Batches of files are read one by one.  A file that cannot be read or has
no data is logged and reported as a ``FileFailure``; the rest of the batch
still goes through.
"""

from __future__ import annotations

import re
import zipfile
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from statusboard.common.exceptions import IngestionError, MalformedInputError, SourceReadError
from statusboard.common.logging import get_logger
from statusboard.core.ingestion.columns import COLUMN_SYNONYMS, find_column, resolve_cell
from statusboard.core.ingestion.health import normalize_health
from statusboard.core.ingestion.schemas import (
    NO_ESCALATION,
    FileFailure,
    IngestionBatch,
    NormalizedReport,
)

logger = get_logger("ingestion.excel_parser")

SPREADSHEET_SUFFIXES = (".xlsx", ".xlsm", ".xls")

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")

_TEXT_FIELDS = (
    "update_for_current_week",
    "plan_for_next_week",
    "issues_challenges",
    "path_to_green",
    "resourcing_status",
    "tower",
    "billing_model",
    "fte",
    "revenue",
)


# ---------------------------------------------------------------------------
# Row parsing
# ---------------------------------------------------------------------------


def is_blank_row(row: Sequence[Any] | None) -> bool:
    """True when every cell is empty.  A literal ``0`` counts as content."""
    if not row:
        return True
    for cell in row:
        if cell is None:
            continue
        if isinstance(cell, str) and not cell.strip():
            continue
        return False
    return True


def parse_week_number(value: str, default: int) -> int:
    """Week from a cell such as ``"12"``, ``"12.0"`` or ``"Week 12"``.

    Fractional or non-positive weeks fall back to *default*.
    """
    match = _NUMBER_RE.search(value or "")
    if not match:
        return default
    number = float(match.group())
    if not number.is_integer() or number < 1:
        return default
    return int(number)


def parse_rows(rows: Sequence[Sequence[Any]]) -> list[NormalizedReport]:
    """Build reports from a header row followed by data rows."""
    if len(rows) < 2 or not rows[0]:
        raise MalformedInputError("Spreadsheet must have header row and at least one data row")

    headers = list(rows[0])
    for field, candidates in COLUMN_SYNONYMS.items():
        if find_column(headers, candidates) is None:
            logger.debug("No column found for '%s'; using default", field)

    reports: list[NormalizedReport] = []
    position = 0
    for row in rows[1:]:
        if is_blank_row(row):
            continue
        position += 1
        reports.append(_build_report(headers, list(row), position))

    if not reports:
        raise MalformedInputError("Spreadsheet must have header row and at least one data row")
    return reports


def _build_report(headers: list[Any], row: list[Any], position: int) -> NormalizedReport:
    def cell(field: str) -> str:
        return resolve_cell(headers, row, COLUMN_SYNONYMS[field])

    text_values = {field: cell(field) for field in _TEXT_FIELDS}
    return NormalizedReport(
        project_name=cell("project_name") or f"Project {position}",
        week_number=parse_week_number(cell("week_number"), position),
        health_previous_week=normalize_health(cell("health_previous_week")),
        health_current_week=normalize_health(cell("health_current_week")),
        client_escalation=cell("client_escalation") or NO_ESCALATION,
        **text_values,
    )


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


def read_rows(path: str | Path) -> list[list[Any]]:
    """All rows of the first worksheet as plain cell values."""
    path = Path(path)
    if not path.is_file():
        raise SourceReadError(f"Spreadsheet not found: {path}")

    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError, ValueError) as e:
        raise SourceReadError(f"Failed to read spreadsheet {path.name}: {e}") from e

    try:
        sheet = workbook.worksheets[0]
        rows = [list(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()

    logger.debug("Read %d rows from %s", len(rows), path)
    return rows


def parse_weekly_status_report(path: str | Path) -> list[NormalizedReport]:
    return parse_rows(read_rows(path))


def find_excel_files(directory: str | Path) -> list[Path]:
    """Spreadsheets directly inside *directory*, sorted by file name."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.suffix.lower() in SPREADSHEET_SUFFIXES and not p.name.startswith("~$")
    )


def ingest_files(paths: Iterable[str | Path]) -> IngestionBatch:
    """Parse each file in order; one bad file never stops the others."""
    reports: list[NormalizedReport] = []
    failures: list[FileFailure] = []
    processed = 0

    for path in paths:
        try:
            file_reports = parse_weekly_status_report(path)
        except IngestionError as e:
            logger.warning("Failed to parse spreadsheet %s: %s", path, e)
            failures.append(FileFailure(path=str(path), error=str(e)))
            continue
        processed += 1
        reports.extend(file_reports)
        logger.info("Parsed %d report(s) from %s", len(file_reports), path)

    return IngestionBatch(reports=reports, failures=failures, files_processed=processed)
