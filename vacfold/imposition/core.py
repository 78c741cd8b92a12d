from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, cast

Mode = Literal["booklet", "cut"]
MODES: tuple[Mode, ...] = ("booklet", "cut")
Slot = Literal["left", "right"]
SLOTS: tuple[Slot, ...] = ("left", "right")
Face = Literal["recto", "verso"]


@dataclass(frozen=True)
class SlotAssignment:
    page: int
    rotated: bool = False


@dataclass(frozen=True)
class ImposedFace:
    face: Face
    left: SlotAssignment | None
    right: SlotAssignment | None

    def assignment(self, slot: Slot) -> SlotAssignment | None:
        return self.left if slot == "left" else self.right

    @property
    def is_blank(self) -> bool:
        return self.left is None and self.right is None

    @property
    def pages(self) -> tuple[int | None, int | None]:
        return (
            None if self.left is None else self.left.page,
            None if self.right is None else self.right.page,
        )


@dataclass(frozen=True)
class Sheet:
    recto: ImposedFace
    verso: ImposedFace


@dataclass(frozen=True)
class LayoutPlan:
    """Ordered output faces for one conversion.

    Faces are listed in output page order: each entry becomes exactly one
    page of the imposed document.
    """

    mode: Mode
    page_count: int
    faces: tuple[ImposedFace, ...]

    @property
    def sheets(self) -> list[Sheet]:
        sheets: list[Sheet] = []
        for index in range(0, len(self.faces), 2):
            recto = self.faces[index]
            if index + 1 < len(self.faces):
                verso = self.faces[index + 1]
            else:
                verso = ImposedFace(face="verso", left=None, right=None)
            sheets.append(Sheet(recto=recto, verso=verso))
        return sheets

    def placed_pages(self) -> list[int]:
        placed: list[int] = []
        for face in self.faces:
            for slot in SLOTS:
                assignment = face.assignment(slot)
                if assignment is not None:
                    placed.append(assignment.page)
        return placed


def resolve_mode(value: str) -> Mode:
    normalized = value.strip().lower()
    if normalized in MODES:
        return cast(Mode, normalized)

    valid = ", ".join(MODES)
    raise ValueError(f"unsupported mode '{value}', expected one of: {valid}")


def _check_page_count(page_count: int) -> None:
    if page_count < 0:
        raise ValueError("page_count must be >= 0")


def plan_booklet(page_count: int) -> list[Sheet]:
    _check_page_count(page_count)

    sheets: list[Sheet] = []
    lo = 0
    hi = page_count - 1
    while lo <= hi:
        # With an odd count the last sheet has lo == hi: the middle page
        # lands in both recto slots and the verso stays blank.
        recto = ImposedFace(
            face="recto",
            left=SlotAssignment(hi),
            right=SlotAssignment(lo),
        )
        verso = ImposedFace(
            face="verso",
            left=SlotAssignment(hi - 1, rotated=True) if hi - 1 >= lo else None,
            right=SlotAssignment(lo + 1, rotated=True) if lo + 1 <= hi else None,
        )
        sheets.append(Sheet(recto=recto, verso=verso))
        lo += 2
        hi -= 2

    return sheets


def plan_cut(page_count: int) -> list[ImposedFace]:
    _check_page_count(page_count)

    faces: list[ImposedFace] = []
    lo = 0
    hi = page_count - 1
    use_tail_next = False
    output_index = 0
    while lo <= hi:
        rotated = output_index % 2 == 1
        face: Face = "verso" if rotated else "recto"
        if use_tail_next:
            faces.append(ImposedFace(face=face, left=SlotAssignment(hi, rotated=rotated), right=None))
            hi -= 1
        else:
            faces.append(ImposedFace(face=face, left=None, right=SlotAssignment(lo, rotated=rotated)))
            lo += 1

        use_tail_next = not use_tail_next
        output_index += 1

    return faces


def plan_layout(page_count: int, mode: str) -> LayoutPlan:
    resolved_mode = resolve_mode(mode)

    if resolved_mode == "booklet":
        faces: list[ImposedFace] = []
        for sheet in plan_booklet(page_count):
            faces.extend((sheet.recto, sheet.verso))
    else:
        faces = plan_cut(page_count)

    return LayoutPlan(mode=resolved_mode, page_count=page_count, faces=tuple(faces))
