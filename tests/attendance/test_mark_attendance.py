from __future__ import annotations

import json
import threading
from datetime import date

import pytest

from src.school_attendance.school_attendance.core.enums import AttendanceStatus, MarkingMethod
from src.school_attendance.school_attendance.core.exceptions import (
    DuplicateError,
    LowConfidenceError,
    NotFoundError,
    ValidationError,
)


def _qr(student) -> str:
    return json.dumps({"studentId": student.student_id, "admissionNo": student.admission_no, "name": student.name})


@pytest.mark.parametrize(
    "first,second",
    [
        ((AttendanceStatus.PRESENT, MarkingMethod.MANUAL), (AttendanceStatus.PRESENT, MarkingMethod.MANUAL)),
        ((AttendanceStatus.ABSENT, MarkingMethod.MANUAL), (AttendanceStatus.PRESENT, MarkingMethod.QR)),
        ((AttendanceStatus.LATE, MarkingMethod.FACE), (AttendanceStatus.ABSENT, None)),
    ],
)
def test_second_mark_for_same_day_is_duplicate(container, make_student, first, second):
    student = make_student()
    day = date(2026, 2, 2)
    svc = container.attendance_service

    svc.mark_attendance(student.student_id, day, *first)
    with pytest.raises(DuplicateError):
        svc.mark_attendance(student.student_id, day, *second)

    assert len(container.attendance_repo.get_history(student.student_id)) == 1


def test_same_student_can_be_marked_on_different_days(container, make_student):
    student = make_student()
    svc = container.attendance_service

    svc.mark_attendance(student.student_id, date(2026, 2, 2), AttendanceStatus.PRESENT, MarkingMethod.MANUAL)
    svc.mark_attendance(student.student_id, date(2026, 2, 3), AttendanceStatus.LATE, MarkingMethod.MANUAL)

    assert len(container.attendance_repo.get_history(student.student_id)) == 2


def test_mark_unknown_student_raises_not_found(container):
    with pytest.raises(NotFoundError):
        container.attendance_service.mark_attendance(
            "missing", date(2026, 2, 2), AttendanceStatus.PRESENT, MarkingMethod.MANUAL
        )


def test_mark_records_method_and_server_timestamp(container, make_student, fixed_now):
    student = make_student()

    record = container.attendance_service.mark_attendance(
        student.student_id,
        fixed_now.date(),
        AttendanceStatus.PRESENT,
        MarkingMethod.MANUAL,
        marked_by="teacher-1",
        now=fixed_now,
    )

    assert record.method == MarkingMethod.MANUAL
    assert record.timestamp == fixed_now
    assert record.marked_by == "teacher-1"


def test_concurrent_marks_for_same_day_only_one_succeeds(container, make_student):
    student = make_student()
    day = date(2026, 2, 2)
    outcomes: list[str] = []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        try:
            container.attendance_service.mark_attendance(
                student.student_id, day, AttendanceStatus.PRESENT, MarkingMethod.QR
            )
            outcomes.append("ok")
        except DuplicateError:
            outcomes.append("dup")

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("dup") == 7


def test_qr_marking_marks_present_today(container, make_student, fixed_now):
    student = make_student(name="Amy")

    result = container.attendance_service.mark(MarkingMethod.QR, {"qrData": _qr(student)}, now=fixed_now)

    assert result.record.status == AttendanceStatus.PRESENT
    assert result.record.method == MarkingMethod.QR
    assert result.record.date == fixed_now.date()
    assert result.to_dict()["student"] == {
        "name": "Amy",
        "admissionNo": student.admission_no,
        "className": "10",
        "section": "A",
    }


def test_qr_marking_twice_is_duplicate(container, make_student, fixed_now):
    student = make_student()
    svc = container.attendance_service

    svc.mark(MarkingMethod.QR, {"qrData": _qr(student)}, now=fixed_now)
    with pytest.raises(DuplicateError):
        svc.mark(MarkingMethod.QR, {"qrData": _qr(student)}, now=fixed_now)


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        json.dumps(["a", "b"]),
        json.dumps({"studentId": "x", "name": "A"}),
        "",
    ],
)
def test_qr_marking_rejects_malformed_payload(container, payload, fixed_now):
    with pytest.raises(ValidationError):
        container.attendance_service.mark(MarkingMethod.QR, {"qrData": payload}, now=fixed_now)


def test_qr_marking_for_unknown_student(container, fixed_now):
    payload = json.dumps({"studentId": "nope", "admissionNo": "X", "name": "Ghost"})

    with pytest.raises(NotFoundError):
        container.attendance_service.mark(MarkingMethod.QR, {"qrData": payload}, now=fixed_now)


def test_face_below_threshold_is_rejected_without_record(container, make_student, fixed_now):
    student = make_student()

    with pytest.raises(LowConfidenceError):
        container.attendance_service.mark(
            MarkingMethod.FACE, {"studentId": student.student_id, "confidence": 79}, now=fixed_now
        )

    assert container.attendance_repo.get_history(student.student_id) == []


def test_face_at_threshold_is_accepted(container, make_student, fixed_now):
    student = make_student()

    result = container.attendance_service.mark(
        MarkingMethod.FACE, {"studentId": student.student_id, "confidence": 80}, now=fixed_now
    )

    assert result.record.method == MarkingMethod.FACE
    assert result.confidence == 80
    assert result.to_dict()["confidence"] == 80


def test_low_confidence_checked_before_student_lookup(container, fixed_now):
    with pytest.raises(LowConfidenceError):
        container.attendance_service.mark(MarkingMethod.FACE, {"studentId": "missing", "confidence": 10}, now=fixed_now)


@pytest.mark.parametrize(
    "confidence",
    [-1, 101, "high", None, "nan", float("nan"), float("inf"), "-inf", True],
)
def test_face_confidence_out_of_range_is_validation_error(container, make_student, confidence, fixed_now):
    student = make_student()

    with pytest.raises(ValidationError):
        container.attendance_service.mark(
            MarkingMethod.FACE, {"studentId": student.student_id, "confidence": confidence}, now=fixed_now
        )

    assert container.attendance_repo.get_history(student.student_id) == []


def test_manual_marking_uses_given_date_and_status(container, make_student, fixed_now):
    student = make_student()

    result = container.attendance_service.mark(
        MarkingMethod.MANUAL,
        {"studentId": student.student_id, "date": "2026-01-15", "status": "late"},
        marked_by="t1",
        now=fixed_now,
    )

    assert result.record.date == date(2026, 1, 15)
    assert result.record.status == AttendanceStatus.LATE
    assert result.record.method is None
    assert result.record.marked_by == "t1"


@pytest.mark.parametrize(
    "payload",
    [
        {"status": "present"},
        {"studentId": "s", "status": "sleeping"},
        {"studentId": "s", "status": "present", "date": "02/02/2026"},
        {"studentId": "s", "status": "present", "method": "telepathy"},
    ],
)
def test_manual_marking_validates_payload(container, payload, fixed_now):
    with pytest.raises(ValidationError):
        container.attendance_service.mark(MarkingMethod.MANUAL, payload, now=fixed_now)


def test_update_attendance_patches_status(container, make_student):
    student = make_student()
    record = container.attendance_service.mark_attendance(
        student.student_id, date(2026, 2, 2), AttendanceStatus.ABSENT, MarkingMethod.MANUAL
    )

    updated = container.attendance_service.update_attendance(record.attendance_id, {"status": "late"})

    assert updated.status == AttendanceStatus.LATE
    assert updated.method == MarkingMethod.MANUAL
    assert updated.date == record.date


def test_update_attendance_cannot_move_date(container, make_student):
    student = make_student()
    record = container.attendance_service.mark_attendance(
        student.student_id, date(2026, 2, 2), AttendanceStatus.ABSENT, MarkingMethod.MANUAL
    )

    with pytest.raises(ValidationError):
        container.attendance_service.update_attendance(record.attendance_id, {"date": "2026-02-03"})


def test_update_unknown_attendance_raises_not_found(container):
    with pytest.raises(NotFoundError):
        container.attendance_service.update_attendance("missing", {"status": "present"})


def test_list_for_date_filters_by_class(container, make_student):
    in_class = make_student(class_name="10")
    other = make_student(class_name="11")
    day = date(2026, 2, 2)
    svc = container.attendance_service
    svc.mark_attendance(in_class.student_id, day, AttendanceStatus.PRESENT, MarkingMethod.MANUAL)
    svc.mark_attendance(other.student_id, day, AttendanceStatus.PRESENT, MarkingMethod.MANUAL)

    assert {r.student_id for r in svc.list_for_date("2026-02-02")} == {in_class.student_id, other.student_id}
    assert [r.student_id for r in svc.list_for_date("2026-02-02", class_name="10")] == [in_class.student_id]


def test_history_range_is_inclusive_and_most_recent_first(container, make_student):
    student = make_student()
    svc = container.attendance_service
    for day in (1, 2, 3, 4):
        svc.mark_attendance(student.student_id, date(2026, 2, day), AttendanceStatus.PRESENT, MarkingMethod.MANUAL)

    history = svc.history(student.student_id, date_from=date(2026, 2, 2), date_to=date(2026, 2, 3))

    assert [r.date.day for r in history] == [3, 2]
