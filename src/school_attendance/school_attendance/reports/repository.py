from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ReportKind
from .model import SavedReport


class ReportRepository(Protocol):
    def save(
        self,
        *,
        name: str,
        kind: ReportKind,
        filters: dict,
        rows: list[dict],
        created_by: Optional[str] = None,
    ) -> SavedReport:
        raise NotImplementedError

    def list_reports(self, *, created_by: Optional[str] = None) -> Sequence[SavedReport]:
        """Newest first."""

        raise NotImplementedError
