from __future__ import annotations

from typing import Final

# Portrait (width, height) in PDF points.
PAPER_SIZES: Final[dict[str, tuple[float, float]]] = {
    "A4": (595.28, 841.89),
    "A5": (420.95, 595.28),
}

DEFAULT_PAPER_SIZE: Final[str] = "A4"
DEFAULT_MODE: Final[str] = "booklet"
MAX_UPLOAD_BYTES: Final[int] = 50 * 1024 * 1024
PDF_MEDIA_TYPE: Final[str] = "application/pdf"
