from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from contracts.content import ContentObject, object_left, object_top


@dataclass(frozen=True, slots=True)
class LineGroup:
    # Inclusive index run over the vertically sorted sequence.
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start + 1


def sort_by_top(objects: Sequence[ContentObject]) -> list[ContentObject]:
    """
    Stable sort by descending `top` (higher on the page first).

    Objects without bounds are unordered relative to everything else, so they keep
    their pre-sort slot and only objects with known bounds move.
    """

    known_slots = [i for i, o in enumerate(objects) if o.bbox is not None]
    known_sorted = sorted((objects[i] for i in known_slots), key=lambda o: -o.bbox.top)

    out = list(objects)
    for slot, obj in zip(known_slots, known_sorted):
        out[slot] = obj
    return out


def cluster_line_groups(objects: Sequence[ContentObject], *, tolerance: float) -> list[LineGroup]:
    # One forward scan; the group reference is the top of its first member.
    groups: list[LineGroup] = []
    start: int | None = None
    ref_top: float | None = None

    for i, obj in enumerate(objects):
        top = object_top(obj)
        if start is not None and top is not None and ref_top is not None and abs(top - ref_top) < tolerance:
            continue
        if start is not None:
            groups.append(LineGroup(start=start, end=i - 1))
        start = i
        ref_top = top

    if start is not None:
        groups.append(LineGroup(start=start, end=len(objects) - 1))
    return groups


def sort_groups_left_to_right(objects: Sequence[ContentObject], groups: Sequence[LineGroup]) -> list[ContentObject]:
    out = list(objects)
    for g in groups:
        if len(g) < 2:
            continue
        members = out[g.start : g.end + 1]
        # Members of a multi-object group always have bounds.
        out[g.start : g.end + 1] = sorted(members, key=lambda o: object_left(o) or 0.0)
    return out


def order_objects(candidates: Sequence[ContentObject], *, tolerance: float) -> list[ContentObject]:
    """
    Reading order: top-to-bottom across line bands, left-to-right inside a band.

    Only objects inside the same band are reordered horizontally.
    """

    vertical = sort_by_top(candidates)
    groups = cluster_line_groups(vertical, tolerance=tolerance)
    return sort_groups_left_to_right(vertical, groups)
