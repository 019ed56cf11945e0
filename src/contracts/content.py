from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from .geometry import BoundingBox


@dataclass(frozen=True, slots=True)
class TextObject:
    index: int  # 0-indexed position in the page's object enumeration
    bbox: BoundingBox | None  # None when the bounds accessor failed
    text: str | None  # None when the text layer could not produce text for this object


@dataclass(frozen=True, slots=True)
class ImageObject:
    index: int
    bbox: BoundingBox | None
    # Opaque engine reference used to decode pixels; never inspected by the core.
    handle: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class OtherObject:
    index: int
    bbox: BoundingBox | None
    object_type: int  # raw engine object type (path, shading, form, ...)


ContentObject = Union[TextObject, ImageObject, OtherObject]


def object_top(obj: ContentObject) -> float | None:
    return None if obj.bbox is None else obj.bbox.top


def object_left(obj: ContentObject) -> float | None:
    return None if obj.bbox is None else obj.bbox.left
