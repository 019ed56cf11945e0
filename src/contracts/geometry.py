from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """
    Object bounds in PDF user space.

    The origin is the page bottom-left, so a larger `top` is higher on the page.
    """

    top: float
    left: float
    bottom: float
    right: float

    @staticmethod
    def from_bounds(pos: tuple[float, float, float, float]) -> "BoundingBox":
        # pdfium reports (left, bottom, right, top)
        left, bottom, right, top = pos
        return BoundingBox(top=float(top), left=float(left), bottom=float(bottom), right=float(right))
