from __future__ import annotations

import io
import json
from datetime import datetime
from typing import Optional

import qrcode

from ..common.datetime_utils import format_instant, now_utc
from ..core.constants import DEFAULT_PAYLOAD_VERSION, DEFAULT_SECURE_KEY, PAYLOAD_TYPE


def build_payload(
    *,
    class_id: str,
    subject_code: str,
    year_section: str = "",
    secure_key: str = DEFAULT_SECURE_KEY,
    version: str = DEFAULT_PAYLOAD_VERSION,
    now: Optional[datetime] = None,
) -> str:
    """Text an instructor's QR code carries for one class session."""
    data = {
        "classId": class_id,
        "subjectCode": subject_code,
        "yearSection": year_section,
        "className": f"{subject_code} {year_section or ''}".strip(),
        "timestamp": format_instant(now or now_utc()),
        "type": PAYLOAD_TYPE,
        "secureKey": secure_key,
        "version": version,
    }
    return json.dumps(data)


def render_qr_png(text: str) -> bytes:
    img = qrcode.make(text)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
