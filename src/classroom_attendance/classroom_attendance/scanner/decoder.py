from __future__ import annotations

import io
from typing import Optional, Protocol, Union

from PIL import Image


class FrameDecoder(Protocol):
    def decode(self, frame) -> Optional[str]:
        raise NotImplementedError


class PyzbarFrameDecoder:
    """Find the first QR code in a camera frame.

    Frames can be PIL images, raw encoded image bytes, or file paths.
    """

    def decode(self, frame: Union[Image.Image, bytes, str, None]) -> Optional[str]:
        if frame is None:
            return None
        # pyzbar binds the zbar shared library on import
        from pyzbar.pyzbar import ZBarSymbol
        from pyzbar.pyzbar import decode as pyzbar_decode

        results = pyzbar_decode(self._to_image(frame), symbols=[ZBarSymbol.QRCODE])
        if not results:
            return None
        return results[0].data.decode("utf-8", errors="replace")

    @staticmethod
    def _to_image(frame) -> Image.Image:
        if isinstance(frame, Image.Image):
            img = frame
        elif isinstance(frame, (bytes, bytearray)):
            img = Image.open(io.BytesIO(bytes(frame)))
        else:
            img = Image.open(frame)
        # zbar works on grayscale
        return img.convert("L")
