from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from functools import partial, reduce
from typing import Any, Callable, Iterable

from contracts.content import ContentObject, ImageObject, OtherObject, TextObject
from contracts.page_items import ImageRef, PageItem, TextLine

from .image_sink import ImageSink

logger = logging.getLogger(__name__)

ImageDecoder = Callable[[ImageObject], Any]


def image_filename(idx: int) -> str:
    return f"image-{idx}.png"


@dataclass(frozen=True, slots=True)
class AssemblyState:
    buffer: str = ""
    last_top: float | None = None  # None until the first object has been visited
    items: tuple[PageItem, ...] = ()
    next_image_index: int = 1  # 1-based, document-scoped
    warnings: tuple[dict[str, Any], ...] = ()


@dataclass(frozen=True, slots=True)
class AssemblyResult:
    items: list[PageItem]
    next_image_index: int
    warnings: list[dict[str, Any]]


def _flushed(state: AssemblyState) -> tuple[PageItem, ...]:
    if state.buffer == "":
        return state.items
    return state.items + (TextLine(text=state.buffer),)


def _warn(state: AssemblyState, *, code: str, message: str, detail: dict[str, Any]) -> tuple[dict[str, Any], ...]:
    return state.warnings + ({"code": code, "message": message, "detail": detail},)


def _step_text(state: AssemblyState, obj: TextObject, *, top: float, tolerance: float) -> AssemblyState:
    text = (obj.text or "").strip()
    if text == "":
        return replace(state, last_top=top)

    if state.last_top is None or state.buffer == "":
        return replace(state, buffer=text, last_top=top)

    # Same line: not more than `tolerance` below the previous object.
    if top > state.last_top - tolerance:
        return replace(state, buffer=f"{state.buffer} {text}", last_top=top)

    return replace(state, buffer=text, last_top=top, items=_flushed(state))


def _step_image(
    state: AssemblyState,
    obj: ImageObject,
    *,
    top: float,
    decode_image: ImageDecoder,
    sink: ImageSink,
) -> AssemblyState:
    try:
        image = decode_image(obj)
        if image is None:
            raise ValueError("decoder returned no image")
    except Exception as e:
        logger.warning("failed to decode image object %d: %s", obj.index, e)
        return replace(
            state,
            last_top=top,
            warnings=_warn(
                state,
                code="ASSEMBLY_IMAGE_DECODE_FAILED",
                message="Image object could not be decoded; skipped.",
                detail={"object_index": obj.index, "error": repr(e)},
            ),
        )

    # The filename is consumed once pixels are available, even if saving fails.
    filename = image_filename(state.next_image_index)
    next_index = state.next_image_index + 1

    try:
        sink.save(image, filename)
    except Exception as e:
        logger.warning("failed to save image - %s, %s", filename, e)
        return replace(
            state,
            last_top=top,
            next_image_index=next_index,
            warnings=_warn(
                state,
                code="ASSEMBLY_IMAGE_SAVE_FAILED",
                message="Decoded image could not be saved; skipped.",
                detail={"object_index": obj.index, "filename": filename, "error": repr(e)},
            ),
        )

    return replace(
        state,
        buffer="",
        last_top=top,
        items=_flushed(state) + (ImageRef(filename=filename),),
        next_image_index=next_index,
    )


def step(
    state: AssemblyState,
    obj: ContentObject,
    *,
    tolerance: float,
    decode_image: ImageDecoder,
    sink: ImageSink,
) -> AssemblyState:
    """
    Single transition of the line assembler.

    Every object, image or text, becomes the new continuation reference
    (`last_top`); objects without bounds count as `top == 0.0`.
    """

    if obj.bbox is None:
        logger.debug("object %d has no bounds; using top=0.0", obj.index)
    top = 0.0 if obj.bbox is None else obj.bbox.top

    if isinstance(obj, ImageObject):
        return _step_image(state, obj, top=top, decode_image=decode_image, sink=sink)
    if isinstance(obj, TextObject):
        return _step_text(state, obj, top=top, tolerance=tolerance)
    if isinstance(obj, OtherObject):
        raise TypeError(f"Object {obj.index} of type {obj.object_type} is not a line assembly candidate")
    raise TypeError(f"Unsupported content object: {type(obj).__name__}")


def finish(state: AssemblyState) -> AssemblyState:
    return replace(state, buffer="", items=_flushed(state))


def assemble_page_items(
    objects: Iterable[ContentObject],
    *,
    tolerance: float,
    decode_image: ImageDecoder,
    sink: ImageSink,
    first_image_index: int = 1,
) -> AssemblyResult:
    """
    Fold the ordered objects of one page into text lines interleaved with images.

    `objects` must already be in reading order. Returns the items together with
    the next free image index so numbering can continue on the following page.
    """

    transition = partial(step, tolerance=tolerance, decode_image=decode_image, sink=sink)
    state = finish(reduce(transition, objects, AssemblyState(next_image_index=first_image_index)))
    return AssemblyResult(
        items=list(state.items),
        next_image_index=state.next_image_index,
        warnings=list(state.warnings),
    )
