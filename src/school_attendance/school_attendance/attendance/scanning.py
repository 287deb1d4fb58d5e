"""Collaborators that turn raw scan input into a student identifier.

Camera capture, QR decoding and face matching happen outside this package.
The marking strategies only see the interfaces below, so a real decoder or
matcher can be dropped in without touching the attendance rules.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

from ..common.validators import require_non_empty, require_number
from ..core.exceptions import ValidationError

QR_REQUIRED_FIELDS = ("studentId", "admissionNo", "name")


@dataclass(frozen=True)
class FaceMatch:
    student_id: str
    confidence: float


class QrResolver(Protocol):
    def resolve(self, payload: str) -> str:
        """Return the student id carried by a scanned payload."""

        raise NotImplementedError


class FaceResolver(Protocol):
    def match(self, payload: Mapping) -> Optional[FaceMatch]:
        """Return the best match for a face submission, or None."""

        raise NotImplementedError


class JsonEnvelopeQrResolver(QrResolver):
    """Reads the JSON envelope printed on student QR codes."""

    def resolve(self, payload: str) -> str:
        if not isinstance(payload, str) or not payload.strip():
            raise ValidationError("QR data is required")
        try:
            data = json.loads(payload)
        except ValueError:
            raise ValidationError("Invalid QR code") from None
        if not isinstance(data, dict):
            raise ValidationError("Invalid QR code")

        missing = [k for k in QR_REQUIRED_FIELDS if not data.get(k)]
        if missing:
            raise ValidationError(f"Invalid QR code: missing {', '.join(missing)}")
        return str(data["studentId"])


class SubmittedFaceResolver(FaceResolver):
    """Uses the match the capturing client already computed.

    The request carries ``studentId`` and a ``confidence`` score in 0-100.
    """

    def match(self, payload: Mapping) -> Optional[FaceMatch]:
        student_id = payload.get("studentId")
        if student_id is None or student_id == "":
            return None
        return FaceMatch(
            student_id=require_non_empty(student_id, "studentId"),
            confidence=require_number(payload.get("confidence"), "confidence", minimum=0, maximum=100),
        )
