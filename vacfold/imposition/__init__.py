from vacfold.imposition.core import (
    MODES,
    SLOTS,
    ImposedFace,
    LayoutPlan,
    Sheet,
    SlotAssignment,
    plan_booklet,
    plan_cut,
    plan_layout,
    resolve_mode,
)
from vacfold.imposition.geometry import (
    Placement,
    fit,
    landscape_sheet_size,
    placement_transformation,
    resolve_paper_dimensions,
    sheet_size_for_source,
    slot_rectangle,
)
from vacfold.imposition.pdf_writer import (
    ImposedDocument,
    compose,
    impose_pdf,
    impose_reader,
    output_filename,
)

__all__ = [
    "MODES",
    "SLOTS",
    "ImposedDocument",
    "ImposedFace",
    "LayoutPlan",
    "Placement",
    "Sheet",
    "SlotAssignment",
    "compose",
    "fit",
    "impose_pdf",
    "impose_reader",
    "landscape_sheet_size",
    "output_filename",
    "placement_transformation",
    "plan_booklet",
    "plan_cut",
    "plan_layout",
    "resolve_mode",
    "resolve_paper_dimensions",
    "sheet_size_for_source",
    "slot_rectangle",
]
