from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class TextLine:
    text: str


@dataclass(frozen=True, slots=True)
class ImageRef:
    filename: str  # image-<n>.png under the images output directory


# Sequence order of page items is the page's reading order.
PageItem = Union[TextLine, ImageRef]
