from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional

from ...core.enums import AttendanceStatus, MarkingMethod


@dataclass(frozen=True)
class MarkingDecision:
    student_id: str
    on_date: date
    status: AttendanceStatus
    method: Optional[MarkingMethod]
    confidence: Optional[float] = None


class MarkingStrategy(ABC):
    """Strategy Pattern: turn one channel's submission into a marking decision."""

    @abstractmethod
    def decide(self, payload: Mapping, *, today: date) -> MarkingDecision:
        raise NotImplementedError
