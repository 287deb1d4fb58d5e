from __future__ import annotations

from datetime import date
from typing import Mapping

from ...core.enums import AttendanceStatus, MarkingMethod
from ..scanning import QrResolver
from .base import MarkingDecision, MarkingStrategy


class QrStrategy(MarkingStrategy):
    """Scanned QR code: present today."""

    def __init__(self, resolver: QrResolver):
        self._resolver = resolver

    def decide(self, payload: Mapping, *, today: date) -> MarkingDecision:
        student_id = self._resolver.resolve(payload.get("qrData"))
        return MarkingDecision(
            student_id=student_id,
            on_date=today,
            status=AttendanceStatus.PRESENT,
            method=MarkingMethod.QR,
        )
