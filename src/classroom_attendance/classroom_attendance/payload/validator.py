"""Scanned payload validation.

The ``secureKey`` check is a shared-secret marker, not a signature: anyone who
knows the payload format can produce a scan that passes it.
"""
from __future__ import annotations

import json
from typing import Union

from ..common.datetime_utils import parse_instant
from ..common.validators import optional_text
from ..core.constants import DEFAULT_SECURE_KEY, PAYLOAD_TYPE, UNKNOWN_LABEL
from ..core.exceptions import MalformedPayload, SecurityValidationFailed, WrongPayloadType
from .model import OpaqueToken, ScanIntent, ScannedPayload


class PayloadValidator:
    def __init__(self, *, secure_key: str = DEFAULT_SECURE_KEY):
        self._secure_key = secure_key

    def decode(self, text: str) -> Union[ScannedPayload, OpaqueToken]:
        """Structured decode only; no authenticity checks."""
        raw = (text or "").strip()
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            return OpaqueToken(raw=raw)
        if not isinstance(data, dict):
            return OpaqueToken(raw=raw)
        return ScannedPayload.from_mapping(data)

    def check(self, payload: ScannedPayload) -> ScanIntent:
        if payload.type != PAYLOAD_TYPE:
            raise WrongPayloadType("Invalid QR code type. Please scan an attendance QR code.")
        if not payload.secure_key or payload.secure_key != self._secure_key or not payload.version:
            raise SecurityValidationFailed("Invalid QR code detected. Please scan a valid attendance code.")

        class_id = optional_text(payload.class_id)
        if not class_id:
            raise MalformedPayload("QR code does not identify a class.")

        year_section = optional_text(payload.year_section)
        return ScanIntent(
            class_id=class_id,
            subject_code=optional_text(payload.subject_code) or UNKNOWN_LABEL,
            class_name=optional_text(payload.class_name) or year_section or UNKNOWN_LABEL,
            year_section=year_section,
            scanned_at=self._parse_timestamp(payload.timestamp),
        )

    def validate(self, text: str) -> ScanIntent:
        """Turn scanned text into a ScanIntent or raise a PayloadError.

        Non-structured text raises MalformedPayload carrying the raw token.
        """
        decoded = self.decode(text)
        if isinstance(decoded, OpaqueToken):
            raise MalformedPayload("Invalid QR code format. Please try again.", raw=decoded.raw)
        return self.check(decoded)

    @staticmethod
    def _parse_timestamp(value):
        if not value:
            return None
        try:
            return parse_instant(value)
        except ValueError:
            return None
