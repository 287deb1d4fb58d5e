from __future__ import annotations

from datetime import date
from typing import Mapping

from ...core.enums import AttendanceStatus, MarkingMethod
from ...core.exceptions import LowConfidenceError, NotFoundError
from ..scanning import FaceResolver
from .base import MarkingDecision, MarkingStrategy


class FaceStrategy(MarkingStrategy):
    """Face match: present today, only at or above the confidence threshold."""

    def __init__(self, resolver: FaceResolver, *, threshold: float):
        self._resolver = resolver
        self._threshold = float(threshold)

    def decide(self, payload: Mapping, *, today: date) -> MarkingDecision:
        match = self._resolver.match(payload)
        if match is None:
            raise NotFoundError("No matching face found")
        if match.confidence < self._threshold:
            raise LowConfidenceError(
                f"Face recognition confidence too low ({match.confidence:g} < {self._threshold:g})"
            )
        return MarkingDecision(
            student_id=match.student_id,
            on_date=today,
            status=AttendanceStatus.PRESENT,
            method=MarkingMethod.FACE,
            confidence=match.confidence,
        )
