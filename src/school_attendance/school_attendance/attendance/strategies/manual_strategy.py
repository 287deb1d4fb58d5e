from __future__ import annotations

from datetime import date
from typing import Mapping

from ...common.datetime_utils import parse_iso_date
from ...common.validators import require_enum, require_non_empty
from ...core.enums import AttendanceStatus, MarkingMethod
from .base import MarkingDecision, MarkingStrategy


class ManualStrategy(MarkingStrategy):
    """Teacher entry: explicit student, date and status; method is optional."""

    def decide(self, payload: Mapping, *, today: date) -> MarkingDecision:
        method = payload.get("method")
        return MarkingDecision(
            student_id=require_non_empty(payload.get("studentId"), "studentId"),
            on_date=parse_iso_date(payload["date"]) if payload.get("date") else today,
            status=require_enum(payload.get("status"), AttendanceStatus, "status"),
            method=require_enum(method, MarkingMethod, "method") if method else None,
        )
