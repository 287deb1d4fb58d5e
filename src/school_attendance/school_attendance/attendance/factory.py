from __future__ import annotations

from dataclasses import dataclass, field

from ..core.constants import DEFAULT_FACE_CONFIDENCE_THRESHOLD
from ..core.enums import MarkingMethod
from .scanning import FaceResolver, JsonEnvelopeQrResolver, QrResolver, SubmittedFaceResolver
from .strategies.base import MarkingStrategy
from .strategies.face_strategy import FaceStrategy
from .strategies.manual_strategy import ManualStrategy
from .strategies.qr_strategy import QrStrategy


@dataclass
class MarkingStrategyFactory:
    """Factory Pattern: choose the marking strategy for a channel."""

    qr_resolver: QrResolver = field(default_factory=JsonEnvelopeQrResolver)
    face_resolver: FaceResolver = field(default_factory=SubmittedFaceResolver)
    face_threshold: float = DEFAULT_FACE_CONFIDENCE_THRESHOLD

    def for_method(self, method: MarkingMethod) -> MarkingStrategy:
        if method == MarkingMethod.QR:
            return QrStrategy(self.qr_resolver)
        if method == MarkingMethod.FACE:
            return FaceStrategy(self.face_resolver, threshold=self.face_threshold)
        return ManualStrategy()
