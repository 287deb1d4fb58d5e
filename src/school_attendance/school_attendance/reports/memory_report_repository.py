from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import ReportKind
from ..database.memory_store import MemoryStore
from .model import SavedReport
from .repository import ReportRepository


class MemoryReportRepository(ReportRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def save(
        self,
        *,
        name: str,
        kind: ReportKind,
        filters: dict,
        rows: list[dict],
        created_by: Optional[str] = None,
    ) -> SavedReport:
        report = SavedReport(
            report_id=self._store.new_id(),
            name=name,
            kind=kind,
            filters=filters,
            rows=rows,
            created_by=created_by,
            created_at=datetime.now(),
        )
        with self._store.transaction() as store:
            store.reports[report.report_id] = report
        return report

    def list_reports(self, *, created_by: Optional[str] = None) -> Sequence[SavedReport]:
        reports = list(self._store.reports.values())
        if created_by:
            reports = [r for r in reports if r.created_by == created_by]
        return sorted(reports, key=lambda r: r.created_at, reverse=True)
