from __future__ import annotations

import unittest
from typing import Any

from contracts.content import ImageObject, OtherObject, TextObject
from contracts.geometry import BoundingBox
from contracts.page_items import ImageRef, TextLine
from reading_order.image_sink import ImageSink
from reading_order.line_assembly import AssemblyState, assemble_page_items, finish, step


class _MemorySink(ImageSink):
    def __init__(self, fail_on: tuple[str, ...] = ()) -> None:
        self.saved: dict[str, Any] = {}
        self.fail_on = set(fail_on)

    def save(self, image: Any, filename: str) -> None:
        if filename in self.fail_on:
            raise OSError("disk full")
        self.saved[filename] = image

    def file_size(self, filename: str) -> int:
        return 10 if filename in self.saved else 0


def _decode(obj: ImageObject) -> Any:
    if obj.handle == "broken":
        raise ValueError("unsupported filter")
    return f"pixels:{obj.index}"


def _text(idx: int, text: str, *, top: float, left: float = 0.0) -> TextObject:
    return TextObject(index=idx, bbox=BoundingBox(top=top, left=left, bottom=top - 10, right=left + 20), text=text)


def _image(idx: int, *, top: float, handle: str = "ok") -> ImageObject:
    return ImageObject(index=idx, bbox=BoundingBox(top=top, left=0, bottom=top - 40, right=40), handle=handle)


def _assemble(objs, *, sink: ImageSink | None = None, first_image_index: int = 1):
    return assemble_page_items(
        objs,
        tolerance=5.0,
        decode_image=_decode,
        sink=sink or _MemorySink(),
        first_image_index=first_image_index,
    )


class TestTextLines(unittest.TestCase):
    def test_within_tolerance_merges_with_single_space(self) -> None:
        r = _assemble([_text(0, "  Hello ", top=100), _text(1, "world  ", top=96)])
        self.assertEqual(r.items, [TextLine("Hello world")])

    def test_difference_of_tolerance_or_more_splits(self) -> None:
        r = _assemble([_text(0, "Hello", top=100), _text(1, "world", top=95)])
        self.assertEqual(r.items, [TextLine("Hello"), TextLine("world")])

    def test_continuation_is_relative_to_previous_object(self) -> None:
        # Each fragment is within tolerance of the one before it.
        r = _assemble([_text(0, "a", top=100), _text(1, "b", top=97), _text(2, "c", top=94)])
        self.assertEqual(r.items, [TextLine("a b c")])

    def test_unbounded_text_counts_as_page_bottom(self) -> None:
        r = _assemble([_text(0, "top", top=100), TextObject(index=1, bbox=None, text="lost")])
        self.assertEqual(r.items, [TextLine("top"), TextLine("lost")])

    def test_empty_input(self) -> None:
        r = _assemble([])
        self.assertEqual(r.items, [])
        self.assertEqual(r.next_image_index, 1)
        self.assertEqual(r.warnings, [])


class TestImages(unittest.TestCase):
    def test_image_flushes_buffer_before_it_is_emitted(self) -> None:
        sink = _MemorySink()
        r = _assemble([_text(0, "before", top=100), _image(1, top=98), _text(2, "after", top=97)], sink=sink)
        self.assertEqual(r.items, [TextLine("before"), ImageRef("image-1.png"), TextLine("after")])
        self.assertEqual(sink.saved, {"image-1.png": "pixels:1"})
        self.assertEqual(r.next_image_index, 2)

    def test_numbering_starts_at_given_index(self) -> None:
        r = _assemble([_image(0, top=100), _image(1, top=50)], first_image_index=7)
        self.assertEqual(r.items, [ImageRef("image-7.png"), ImageRef("image-8.png")])
        self.assertEqual(r.next_image_index, 9)

    def test_decode_failure_emits_nothing_and_keeps_counter(self) -> None:
        sink = _MemorySink()
        r = _assemble(
            [_text(0, "a", top=100), _image(1, top=100, handle="broken"), _text(2, "b", top=100), _image(3, top=50)],
            sink=sink,
        )
        # The buffer survives the failed image, so "a" and "b" still share a line.
        self.assertEqual(r.items, [TextLine("a b"), ImageRef("image-1.png")])
        self.assertEqual(r.next_image_index, 2)
        self.assertEqual([w["code"] for w in r.warnings], ["ASSEMBLY_IMAGE_DECODE_FAILED"])
        self.assertEqual(r.warnings[0]["detail"]["object_index"], 1)

    def test_save_failure_consumes_filename(self) -> None:
        sink = _MemorySink(fail_on=("image-1.png",))
        r = _assemble([_text(0, "a", top=100), _image(1, top=60), _image(2, top=20)], sink=sink)
        self.assertEqual(r.items, [TextLine("a"), ImageRef("image-2.png")])
        self.assertEqual(r.next_image_index, 3)
        self.assertEqual([w["code"] for w in r.warnings], ["ASSEMBLY_IMAGE_SAVE_FAILED"])
        self.assertEqual(r.warnings[0]["detail"]["filename"], "image-1.png")

    def test_image_first_then_text(self) -> None:
        r = _assemble([_image(0, top=100), _text(1, "caption", top=99)])
        self.assertEqual(r.items, [ImageRef("image-1.png"), TextLine("caption")])


class TestStep(unittest.TestCase):
    def test_single_transitions(self) -> None:
        sink = _MemorySink()
        s0 = AssemblyState()
        s1 = step(s0, _text(0, "x", top=10), tolerance=5.0, decode_image=_decode, sink=sink)
        self.assertEqual((s1.buffer, s1.last_top, s1.items), ("x", 10, ()))

        s2 = step(s1, _text(1, "y", top=0), tolerance=5.0, decode_image=_decode, sink=sink)
        self.assertEqual((s2.buffer, s2.items), ("y", (TextLine("x"),)))

        s3 = finish(s2)
        self.assertEqual((s3.buffer, s3.items), ("", (TextLine("x"), TextLine("y"))))
        # Input states are untouched.
        self.assertEqual(s0, AssemblyState())

    def test_non_candidate_object_is_rejected(self) -> None:
        other = OtherObject(index=0, bbox=None, object_type=2)
        with self.assertRaises(TypeError):
            step(AssemblyState(), other, tolerance=5.0, decode_image=_decode, sink=_MemorySink())


if __name__ == "__main__":
    unittest.main()
