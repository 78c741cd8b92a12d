from __future__ import annotations

import io

import pytest
from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError
from pypdf.generic import DecodedStreamObject

from vacfold.constants import PAPER_SIZES
from vacfold.imposition.pdf_writer import impose_pdf

pytestmark = pytest.mark.mvp_integration


def _marker(page_index: int) -> bytes:
    return f"0 0 {100 + page_index} 7 re".encode("ascii")


def _marked_pdf_bytes(page_count: int) -> bytes:
    writer = PdfWriter()
    width, height = PAPER_SIZES["A5"]
    for index in range(page_count):
        page = writer.add_blank_page(width=width, height=height)
        stream = DecodedStreamObject()
        stream.set_data(_marker(index) + b"\nf\n")
        page.replace_contents(stream)
    payload = io.BytesIO()
    writer.write(payload)
    return payload.getvalue()


def _placed_markers(payload: bytes, page_count: int) -> list[list[int]]:
    """Source page indices drawn on each output page, in drawing order."""
    placed: list[list[int]] = []
    for page in PdfReader(io.BytesIO(payload)).pages:
        content = page._get_contents_as_bytes() or b""
        hits: list[tuple[int, int]] = []
        for index in range(page_count):
            start = content.find(_marker(index))
            while start != -1:
                hits.append((start, index))
                start = content.find(_marker(index), start + 1)
        placed.append([index for _, index in sorted(hits)])
    return placed


def test_booklet_eight_pages_places_recto_then_verso_per_sheet() -> None:
    document = impose_pdf(_marked_pdf_bytes(8), mode="booklet")

    assert document.page_count == 4
    assert _placed_markers(document.payload, 8) == [
        [7, 0],
        [6, 1],
        [5, 2],
        [4, 3],
    ]


def test_booklet_five_pages_draws_middle_page_twice_and_blank_verso() -> None:
    document = impose_pdf(_marked_pdf_bytes(5), mode="booklet")

    assert _placed_markers(document.payload, 5) == [
        [4, 0],
        [3, 1],
        [2, 2],
        [],
    ]


def test_cut_mode_isolates_each_page_on_its_own_sheet() -> None:
    document = impose_pdf(_marked_pdf_bytes(4), mode="cut")

    assert document.page_count == 4
    assert _placed_markers(document.payload, 4) == [[0], [3], [1], [2]]


@pytest.mark.parametrize("mode", ["booklet", "cut"])
def test_output_pages_are_a4_landscape(mode: str) -> None:
    document = impose_pdf(_marked_pdf_bytes(3), mode=mode)

    a4_width, a4_height = PAPER_SIZES["A4"]
    for page in PdfReader(io.BytesIO(document.payload)).pages:
        assert float(page.mediabox.width) == pytest.approx(a4_height, abs=0.01)
        assert float(page.mediabox.height) == pytest.approx(a4_width, abs=0.01)


def test_invalid_source_bytes_propagate_decoder_error() -> None:
    with pytest.raises(PdfReadError):
        impose_pdf(b"definitely not a pdf", mode="booklet")
