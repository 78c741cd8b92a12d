from __future__ import annotations

import io
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from pypdf import PageObject, PdfReader, PdfWriter

from vacfold.constants import DEFAULT_MODE, DEFAULT_PAPER_SIZE
from vacfold.imposition.core import SLOTS, LayoutPlan, Mode, Slot, SlotAssignment, plan_layout, resolve_mode
from vacfold.imposition.geometry import Placement, fit, landscape_sheet_size, placement_transformation, slot_rectangle


@dataclass(frozen=True)
class ImposedDocument:
    payload: bytes
    page_count: int
    mode: Mode
    plan: LayoutPlan


def output_filename(source_name: str, mode: str) -> str:
    stem = Path(source_name).stem.strip()
    slug = re.sub(r"[^A-Za-z0-9]+", "-", stem).strip("-")
    slug = slug or "output"
    return f"{slug}-{resolve_mode(mode)}.pdf"


def _slot_placement(
    source_page: PageObject,
    assignment: SlotAssignment,
    slot: Slot,
    sheet_width: float,
    sheet_height: float,
) -> Placement:
    slot_x, slot_y, slot_width, slot_height = slot_rectangle(slot, sheet_width, sheet_height)
    return fit(
        float(source_page.mediabox.width),
        float(source_page.mediabox.height),
        slot_width,
        slot_height,
        slot_x,
        slot_y,
        rotated=assignment.rotated,
    )


def _place_assignment(
    imposed_page,
    source_pages: Sequence[PageObject],
    assignment: SlotAssignment | None,
    slot: Slot,
    sheet_width: float,
    sheet_height: float,
) -> Placement | None:
    if assignment is None:
        return None

    source_page = source_pages[assignment.page]
    placement = _slot_placement(source_page, assignment, slot, sheet_width, sheet_height)
    origin = (float(source_page.mediabox.left), float(source_page.mediabox.bottom))
    imposed_page.merge_transformed_page(source_page, placement_transformation(placement, origin))
    return placement


def compose(
    source_pages: Sequence[PageObject],
    plan: LayoutPlan,
    sheet_width: float,
    sheet_height: float,
) -> bytes:
    """Render a layout plan into a new PDF and return its bytes.

    Every planned face becomes one output page of ``sheet_width`` by
    ``sheet_height``; a booklet plan therefore yields recto/verso pairs.
    """
    if plan.page_count != len(source_pages):
        raise ValueError(
            f"layout plan covers {plan.page_count} pages but the source has {len(source_pages)}"
        )

    writer = PdfWriter()
    for face in plan.faces:
        imposed_page = writer.add_blank_page(width=sheet_width, height=sheet_height)
        for slot in SLOTS:
            _place_assignment(
                imposed_page,
                source_pages,
                face.assignment(slot),
                slot,
                sheet_width,
                sheet_height,
            )

    payload = io.BytesIO()
    writer.write(payload)
    return payload.getvalue()


def impose_reader(
    reader: PdfReader,
    mode: str = DEFAULT_MODE,
    paper_size: str = DEFAULT_PAPER_SIZE,
) -> ImposedDocument:
    resolved_mode = resolve_mode(mode)
    sheet_width, sheet_height = landscape_sheet_size(paper_size)

    source_pages = list(reader.pages)
    plan = plan_layout(len(source_pages), resolved_mode)
    output = compose(source_pages, plan, sheet_width, sheet_height)
    return ImposedDocument(payload=output, page_count=len(plan.faces), mode=resolved_mode, plan=plan)


def impose_pdf(
    payload: bytes,
    mode: str = DEFAULT_MODE,
    paper_size: str = DEFAULT_PAPER_SIZE,
) -> ImposedDocument:
    """Bytes-in, bytes-out conversion onto landscape sheets of ``paper_size``.

    The mode is checked before the payload is decoded; decode errors from
    pypdf propagate unchanged.
    """
    resolved_mode = resolve_mode(mode)
    return impose_reader(PdfReader(io.BytesIO(payload)), resolved_mode, paper_size)
