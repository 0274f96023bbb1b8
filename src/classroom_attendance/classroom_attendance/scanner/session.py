"""Scan polling loop.

A single timer handle is owned by the session. On every tick the latest frame
is decoded; only one decode runs at a time. A successful decode or an explicit
stop clears the timer before anything else happens, so no further ticks fire
after the session leaves SCANNING.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

from ..core.constants import DEFAULT_SCAN_INTERVAL
from ..core.enums import ScanState
from .decoder import FrameDecoder

logger = logging.getLogger(__name__)

FrameSource = Callable[[], Any]
DecodedHandler = Callable[[str], None]


class ScanSession:
    def __init__(
        self,
        *,
        frames: FrameSource,
        decoder: FrameDecoder,
        on_decoded: DecodedHandler,
        interval: float = DEFAULT_SCAN_INTERVAL,
        on_error: Optional[Callable[[Exception], None]] = None,
    ):
        self._frames = frames
        self._decoder = decoder
        self._on_decoded = on_decoded
        self._on_error = on_error
        self._interval = float(interval)

        self._lock = threading.RLock()
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._in_flight = False
        self._state = ScanState.IDLE

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def has_timer(self) -> bool:
        return self._timer is not None

    def start(self) -> None:
        with self._lock:
            if self._state == ScanState.SCANNING:
                return
            self._state = ScanState.SCANNING
            self._arm()

    def stop(self) -> None:
        with self._lock:
            if self._state in (ScanState.IDLE, ScanState.SCANNING):
                self._state = ScanState.STOPPED
            self._cancel_timer()

    def tick(self) -> Optional[str]:
        """Run one decode attempt; returns the decoded text, if any."""
        with self._lock:
            if self._state != ScanState.SCANNING or self._in_flight:
                return None
            self._in_flight = True

        try:
            text = self._decoder.decode(self._frames())
        except Exception as e:
            logger.warning("Frame decode failed: %s", e)
            if self._on_error:
                self._on_error(e)
            text = None
        finally:
            with self._lock:
                self._in_flight = False

        if not text:
            return None

        with self._lock:
            if self._state != ScanState.SCANNING:
                return None
            self._state = ScanState.DECODED
            self._cancel_timer()

        logger.debug("QR code decoded (%d chars)", len(text))
        self._on_decoded(text)
        return text

    def _arm(self) -> None:
        self._generation += 1
        timer = threading.Timer(self._interval, self._run_tick, args=(self._generation,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _run_tick(self, generation: int) -> None:
        self.tick()
        with self._lock:
            # a stop/start during the tick handed polling to a newer timer
            if self._state == ScanState.SCANNING and generation == self._generation:
                self._arm()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
