# ABOUTME: Decoder adapter turning a frame source into a lazy stream of decoded barcode text.
# ABOUTME: Ships a pyzbar/OpenCV camera engine and a line engine for keyboard-wedge scanners.

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Protocol, TextIO

logger = logging.getLogger(__name__)


class DecoderUnavailableError(Exception):
    """Raised when the camera cannot be opened."""


class BarcodeEngine(Protocol):
    """Decodes every barcode visible in one frame."""

    def decode(self, frame: Any) -> list[str]: ...


class DecoderAdapter:
    """Adapts a frame source plus a decoding engine into raw scan events.

    stream() yields one string per recognized barcode per frame, repeats and
    junk included; filtering is the scan gate's job. Each call to stream()
    reopens the source, so a stopped stream can be restarted.
    """

    def __init__(
        self,
        open_frames: Callable[[], Iterable[Any]],
        engine: BarcodeEngine,
    ) -> None:
        self._open_frames = open_frames
        self._engine = engine

    def stream(self) -> Iterator[str]:
        for frame in self._open_frames():
            yield from self._engine.decode(frame)


class PyzbarEngine:
    """Decodes 1D/2D barcodes from OpenCV frames with pyzbar."""

    def decode(self, frame: Any) -> list[str]:
        from pyzbar import pyzbar

        return [
            symbol.data.decode("utf-8", errors="replace")
            for symbol in pyzbar.decode(frame)
        ]


class LineEngine:
    """Treats each text line as one decoded barcode (USB scanners that type codes)."""

    def decode(self, frame: str) -> list[str]:
        text = frame.strip()
        return [text] if text else []


def camera_frames(device: int = 0) -> Iterator[Any]:
    """Yield frames from a local camera until it stops delivering them.

    Raises:
        DecoderUnavailableError: If the device cannot be opened.
    """
    import cv2

    capture = cv2.VideoCapture(device)
    if not capture.isOpened():
        raise DecoderUnavailableError(f"Cannot open camera device {device}")
    logger.info("Camera %d opened", device)
    try:
        while True:
            ok, frame = capture.read()
            if not ok:
                logger.info("Camera %d stopped delivering frames", device)
                return
            yield frame
    finally:
        capture.release()


def camera_decoder(device: int = 0) -> DecoderAdapter:
    return DecoderAdapter(lambda: camera_frames(device), PyzbarEngine())


def line_decoder(source: TextIO) -> DecoderAdapter:
    return DecoderAdapter(lambda: source, LineEngine())
