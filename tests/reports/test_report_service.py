from __future__ import annotations

import csv
import io
from datetime import date, datetime

import pandas as pd
import pytest

from src.school_attendance.school_attendance.core.constants import REPORT_HEADERS, REPORT_SHEET_NAME
from src.school_attendance.school_attendance.core.enums import AttendanceStatus, ExportFormat, MarkingMethod, ReportKind
from src.school_attendance.school_attendance.core.exceptions import ReportBuildError
from src.school_attendance.school_attendance.reports.exporters.pdf_exporter import layout_pages
from src.school_attendance.school_attendance.reports.model import BuiltReport, ReportRequest, ReportRow
from src.school_attendance.school_attendance.reports.service import request_from_payload


def _payload(**overrides):
    data = {"type": "custom", "dateRange": {"from": "2026-02-01", "to": "2026-02-28"}}
    data.update(overrides)
    return data


def _mark(container, student, day, status):
    container.attendance_service.mark_attendance(student.student_id, date(2026, 2, day), status, MarkingMethod.MANUAL)


def _row(i: int, name: str = "Student") -> ReportRow:
    return ReportRow(
        admission_no=f"ADM{i:03d}",
        name=name,
        class_label="10-A",
        total_days=3,
        present_days=2,
        absent_days=1,
        percentage=67,
    )


def _built(rows) -> BuiltReport:
    req = ReportRequest(kind=ReportKind.CUSTOM, date_from=date(2026, 2, 1), date_to=date(2026, 2, 28))
    return BuiltReport(request=req, rows=list(rows), generated_at=datetime(2026, 2, 28, 9, 0))


@pytest.fixture
def roster(container, make_student):
    amy = make_student(name="Amy", class_name="10")
    ben = make_student(name="Ben", class_name="10")
    cal = make_student(name="Cal", class_name="11")
    _mark(container, amy, 2, AttendanceStatus.PRESENT)
    _mark(container, amy, 3, AttendanceStatus.ABSENT)
    _mark(container, amy, 4, AttendanceStatus.LATE)
    _mark(container, ben, 2, AttendanceStatus.ABSENT)
    # Outside the requested range.
    container.attendance_service.mark_attendance(
        amy.student_id, date(2026, 3, 1), AttendanceStatus.PRESENT, MarkingMethod.MANUAL
    )
    return amy, ben, cal


def test_build_rows_per_student(container, roster):
    report, exported = container.report_service.generate(_payload())

    assert exported is None
    by_name = {r.name: r for r in report.rows}
    assert by_name["Amy"].to_dict() == {
        "admissionNo": roster[0].admission_no,
        "name": "Amy",
        "class": "10-A",
        "totalDays": 3,
        "presentDays": 2,
        "absentDays": 1,
        "percentage": 67,
    }
    assert by_name["Ben"].percentage == 0
    assert by_name["Cal"].total_days == 0
    assert by_name["Cal"].percentage == 0


def test_build_rows_filtered_by_class(container, roster):
    report, _ = container.report_service.generate(_payload(className="10"))

    assert [r.name for r in report.rows] == ["Amy", "Ben"]


def test_report_kind_does_not_change_rows(container, roster):
    rows = {}
    for kind in ReportKind:
        report, _ = container.report_service.generate(_payload(type=kind.value))
        rows[kind] = [r.to_dict() for r in report.rows]

    assert all(r == rows[ReportKind.CUSTOM] for r in rows.values())


def test_empty_class_is_an_empty_report(container, roster):
    report, _ = container.report_service.generate(_payload(className="12"))

    assert report.rows == []


@pytest.mark.parametrize(
    "payload",
    [
        _payload(type="yearly"),
        _payload(format="docx"),
        _payload(dateRange={"from": "2026-02-28", "to": "2026-02-01"}),
        _payload(dateRange={"from": "yesterday", "to": "2026-02-01"}),
        _payload(dateRange=None),
        {"dateRange": {"from": "2026-02-01", "to": "2026-02-28"}},
    ],
)
def test_malformed_report_request(payload):
    with pytest.raises(ReportBuildError):
        request_from_payload(payload)


def test_single_day_range_is_valid():
    req = request_from_payload(_payload(dateRange={"from": "2026-02-02", "to": "2026-02-02"}, format="CSV"))

    assert req.date_from == req.date_to
    assert req.export_format == ExportFormat.CSV


def test_csv_export_reads_back_to_rows(container, roster):
    report, exported = container.report_service.generate(_payload(format="csv"))

    assert exported.mimetype == "text/csv"
    assert exported.filename == "attendance-report-custom-20260201-20260228.csv"
    assert exported.content.startswith(b"\xef\xbb\xbf")

    lines = list(csv.reader(io.StringIO(exported.content.decode("utf-8-sig"))))
    assert lines[0] == list(REPORT_HEADERS)
    assert lines[1:] == [[str(c) for c in r.as_cells()] for r in report.rows]


def test_csv_export_quotes_names_with_commas(container):
    exported = container.report_service.export(_built([_row(1, name='Nair, Meera "Mee"')]), ExportFormat.CSV)

    text = exported.content.decode("utf-8-sig")
    assert '"Nair, Meera ""Mee"""' in text
    assert list(csv.reader(io.StringIO(text)))[1][1] == 'Nair, Meera "Mee"'


def test_excel_export_single_sheet(container, roster):
    report, exported = container.report_service.generate(_payload(format="excel"))

    assert exported.filename.endswith(".xlsx")
    sheets = pd.read_excel(io.BytesIO(exported.content), sheet_name=None, engine="openpyxl")
    assert list(sheets) == [REPORT_SHEET_NAME]
    df = sheets[REPORT_SHEET_NAME]
    assert list(df.columns) == list(REPORT_HEADERS)
    assert df["Name"].tolist() == [r.name for r in report.rows]
    assert df["Attendance %"].tolist() == [r.percentage for r in report.rows]


def test_pdf_export_is_pdf(container, roster):
    _, exported = container.report_service.generate(_payload(format="pdf"))

    assert exported.mimetype == "application/pdf"
    assert exported.content.startswith(b"%PDF")


def test_pdf_layout_breaks_pages():
    pages = layout_pages([_row(i) for i in range(80)])

    assert [len(p.rows) for p in pages] == [33, 43, 4]
    assert pages[0].header_y == 200
    assert pages[0].rows[0][0] == 220
    assert pages[0].rows[-1][0] == 700
    assert pages[1].header_y == 50
    assert pages[1].rows[0][0] == 70


def test_pdf_layout_empty_report_has_one_page():
    pages = layout_pages([])

    assert len(pages) == 1
    assert pages[0].rows == []


def test_pdf_export_long_report(container):
    exported = container.report_service.export(_built([_row(i, name="X" * 60) for i in range(80)]), ExportFormat.PDF)

    assert exported.content.startswith(b"%PDF")


def test_generated_reports_are_saved(container, roster):
    container.report_service.generate(_payload(type="monthly"), created_by="user-1")
    container.report_service.generate(_payload(className="10"), created_by="user-2")

    mine = container.report_service.list_saved(created_by="user-1")
    assert len(mine) == 1
    assert mine[0].kind == ReportKind.MONTHLY
    assert mine[0].filters == {"dateRange": {"from": "2026-02-01", "to": "2026-02-28"}, "className": None}
    assert len(mine[0].rows) == 3
    assert len(container.report_service.list_saved()) == 2
