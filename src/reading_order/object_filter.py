from __future__ import annotations

from typing import Iterable

from contracts.content import ContentObject, ImageObject, TextObject


def is_candidate(obj: ContentObject) -> bool:
    if isinstance(obj, ImageObject):
        return True
    if isinstance(obj, TextObject):
        # A failed text accessor (text is None) drops the object.
        return obj.text is not None and obj.text.strip() != ""
    return False


def select_candidates(objects: Iterable[ContentObject]) -> list[ContentObject]:
    """
    Keep every image and every text object with non-blank text; drop everything else.

    Enumeration order is preserved but carries no meaning for later stages.
    """

    return [o for o in objects if is_candidate(o)]
