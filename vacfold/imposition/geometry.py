from __future__ import annotations

from dataclasses import dataclass

from pypdf import Transformation

from vacfold.constants import PAPER_SIZES
from vacfold.imposition.core import Slot


@dataclass(frozen=True)
class Placement:
    x: float
    y: float
    width: float
    height: float
    scale: float
    rotated: bool = False

    @property
    def anchor(self) -> tuple[float, float]:
        # A 180 degree turn pivots on the insertion point, so the content is
        # inserted at the far corner to keep the same visual box.
        if self.rotated:
            return self.x + self.width, self.y + self.height
        return self.x, self.y

    @property
    def rotation_degrees(self) -> int:
        return 180 if self.rotated else 0


def fit(
    source_width: float,
    source_height: float,
    target_width: float,
    target_height: float,
    target_x: float = 0.0,
    target_y: float = 0.0,
    *,
    rotated: bool = False,
) -> Placement:
    """Scale a source page uniformly into a target rectangle and center it."""
    if source_width <= 0 or source_height <= 0:
        scale = 0.0
    else:
        scale = min(target_width / source_width, target_height / source_height)

    width = source_width * scale
    height = source_height * scale
    return Placement(
        x=target_x + (target_width - width) / 2.0,
        y=target_y + (target_height - height) / 2.0,
        width=width,
        height=height,
        scale=scale,
        rotated=rotated,
    )


def slot_rectangle(slot: Slot, sheet_width: float, sheet_height: float) -> tuple[float, float, float, float]:
    slot_width = sheet_width / 2.0
    slot_x = slot_width if slot == "right" else 0.0
    return slot_x, 0.0, slot_width, sheet_height


def placement_transformation(
    placement: Placement,
    source_origin: tuple[float, float] = (0.0, 0.0),
) -> Transformation:
    origin_x, origin_y = source_origin
    transform = Transformation().translate(-origin_x, -origin_y).scale(placement.scale, placement.scale)
    if placement.rotated:
        transform = transform.rotate(placement.rotation_degrees)

    anchor_x, anchor_y = placement.anchor
    return transform.translate(anchor_x, anchor_y)


def resolve_paper_dimensions(paper_size: str) -> tuple[float, float]:
    try:
        return PAPER_SIZES[paper_size]
    except KeyError as exc:
        valid = ", ".join(sorted(PAPER_SIZES))
        raise ValueError(f"unsupported paper size '{paper_size}', expected one of: {valid}") from exc


def landscape_sheet_size(paper_size: str) -> tuple[float, float]:
    width, height = resolve_paper_dimensions(paper_size)
    return height, width


def sheet_size_for_source(source_width: float, source_height: float) -> tuple[float, float]:
    return source_width * 2.0, source_height
