import pytest

from statusboard.common.enums import HealthStatus
from statusboard.common.exceptions import MalformedInputError, SourceReadError
from statusboard.core.ingestion.excel_parser import (
    find_excel_files,
    ingest_files,
    is_blank_row,
    parse_rows,
    parse_week_number,
    parse_weekly_status_report,
    read_rows,
)
from statusboard.tests.helpers import report_row, write_workbook


def test_parse_workbook(tmp_path):
    path = write_workbook(
        tmp_path / "status.xlsx",
        [
            report_row("Alpha", current="Amber", previous="g", **{"Issues/Challenges": "Late vendor"}),
            report_row("Beta", current="R", **{"Client Escalation": "CFO complaint"}),
        ],
    )

    reports = parse_weekly_status_report(path)

    assert [r.project_name for r in reports] == ["Alpha", "Beta"]
    alpha, beta = reports
    assert alpha.week_number == 12
    assert alpha.health_previous_week == HealthStatus.GREEN
    assert alpha.health_current_week == HealthStatus.AMBER
    assert alpha.issues_challenges == "Late vendor"
    assert alpha.fte == "6"
    assert alpha.revenue == "120000"
    assert alpha.tower == "Digital"
    assert not alpha.has_escalation
    assert beta.health_current_week == HealthStatus.RED
    assert beta.has_escalation


def test_blank_rows_skipped_and_missing_names_get_placeholders():
    rows = [
        ["Project Name", "Health Current Week"],
        [None, "Red"],
        ["", "  "],
        ["Gamma", None],
    ]

    reports = parse_rows(rows)

    assert [r.project_name for r in reports] == ["Project 1", "Gamma"]
    assert reports[0].health_current_week == HealthStatus.RED
    assert reports[1].health_current_week == HealthStatus.GREEN
    # No week column: the row position is used
    assert [r.week_number for r in reports] == [1, 2]


def test_missing_columns_use_defaults():
    reports = parse_rows([["Project"], ["Delta"]])

    report = reports[0]
    assert report.project_name == "Delta"
    assert report.health_previous_week == HealthStatus.GREEN
    assert report.client_escalation == "None"
    assert report.update_for_current_week == ""
    assert report.tower == ""


def test_zero_is_content():
    assert not is_blank_row([None, 0, ""])
    assert is_blank_row([None, "", "   "])
    assert is_blank_row([])
    reports = parse_rows([["Project Name", "FTE"], [None, 0]])
    assert reports[0].fte == "0"


@pytest.mark.parametrize(
    "rows",
    [
        [],
        [["Project Name", "Health Current Week"]],
        [["Project Name"], [None], ["  "]],
    ],
)
def test_malformed_sheets(rows):
    with pytest.raises(MalformedInputError):
        parse_rows(rows)


def test_parse_week_number():
    assert parse_week_number("Week 7", 3) == 7
    assert parse_week_number("W12", 3) == 12
    assert parse_week_number("12.0", 3) == 12
    assert parse_week_number("", 3) == 3
    assert parse_week_number("n/a", 4) == 4


@pytest.mark.parametrize("value", ["-2", "0", "3.9", "Week 0"])
def test_parse_week_number_rejects_invalid_weeks(value):
    assert parse_week_number(value, 5) == 5


def test_invalid_week_cells_fall_back_to_row_position():
    reports = parse_rows([["Project Name", "Week"], ["Alpha", "-2"], ["Beta", 3.9], ["Gamma", 4]])

    assert [r.week_number for r in reports] == [1, 2, 4]


def test_read_rows_missing_file(tmp_path):
    with pytest.raises(SourceReadError):
        read_rows(tmp_path / "nope.xlsx")


def test_read_rows_corrupt_file(tmp_path):
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"this is not a workbook")

    with pytest.raises(SourceReadError):
        read_rows(path)


def test_find_excel_files(tmp_path):
    write_workbook(tmp_path / "b.xlsx", [report_row("B")])
    write_workbook(tmp_path / "a.xlsx", [report_row("A")])
    (tmp_path / "~$a.xlsx").write_bytes(b"lock")
    (tmp_path / "notes.txt").write_text("ignore me")

    files = find_excel_files(tmp_path)

    assert [f.name for f in files] == ["a.xlsx", "b.xlsx"]
    assert find_excel_files(tmp_path / "missing") == []


def test_ingest_files_isolates_failures(tmp_path):
    good = write_workbook(tmp_path / "good.xlsx", [report_row("Alpha"), report_row("Beta")])
    empty = write_workbook(tmp_path / "empty.xlsx", [])
    corrupt = tmp_path / "corrupt.xlsx"
    corrupt.write_bytes(b"garbage")
    other = write_workbook(tmp_path / "other.xlsx", [report_row("Gamma")])

    batch = ingest_files([good, empty, corrupt, other])

    assert [r.project_name for r in batch.reports] == ["Alpha", "Beta", "Gamma"]
    assert batch.files_processed == 2
    assert [f.path for f in batch.failures] == [str(empty), str(corrupt)]
    assert all(f.error for f in batch.failures)


def test_minimal_sheet_yields_one_report_with_defaults():
    reports = parse_rows([["Project Name", "Health Current Week"], ["Alpha", "red"]])

    assert len(reports) == 1
    report = reports[0]
    assert report.project_name == "Alpha"
    assert report.health_current_week == HealthStatus.RED
    assert report.health_previous_week == HealthStatus.GREEN
    assert report.week_number == 1
    assert report.client_escalation == "None"
    assert report.revenue == ""
