from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import BuiltReport


class ReportExporter(ABC):
    """Exporter interface (Strategy Pattern for output encodings)."""

    mimetype: str = "application/octet-stream"
    extension: str = "bin"

    @abstractmethod
    def render(self, report: BuiltReport) -> bytes:
        raise NotImplementedError
