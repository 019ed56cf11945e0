from __future__ import annotations

from dataclasses import dataclass


# Allowed vertical difference between two objects' tops for them to share a line.
DEFAULT_LINE_TOLERANCE = 5.0


@dataclass(frozen=True, slots=True)
class ReadingOrderConfig:
    """
    Reading-order reconstruction parameters.

    Defaults are explicit constants. Distances are in PDF page units (1/72 inch).
    """

    line_tolerance: float = DEFAULT_LINE_TOLERANCE
    # Lines shorter than this are artifacts for image association purposes only.
    min_related_line_chars: int = 2
    related_line_count: int = 2

    def validate(self) -> None:
        if self.line_tolerance <= 0:
            raise ValueError("line_tolerance must be > 0")
        if self.min_related_line_chars < 0:
            raise ValueError("min_related_line_chars must be >= 0")
        if self.related_line_count < 1:
            raise ValueError("related_line_count must be >= 1")
