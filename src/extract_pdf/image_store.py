from __future__ import annotations

from pathlib import Path
from typing import Any

from reading_order.image_sink import ImageSink

# Modes Pillow can write as PNG without conversion.
_PNG_MODES = frozenset({"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"})


class PngImageStore(ImageSink):
    """
    Writes decoded page images as PNG files under one output directory.
    """

    def __init__(self, images_dir: Path) -> None:
        self.images_dir = images_dir

    def ensure_dir(self) -> None:
        self.images_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, filename: str) -> Path:
        return self.images_dir / filename

    def save(self, image: Any, filename: str) -> None:
        if image.mode not in _PNG_MODES:
            image = image.convert("RGB")
        image.save(self.path_for(filename), format="PNG")

    def file_size(self, filename: str) -> int:
        try:
            return int(self.path_for(filename).stat().st_size)
        except OSError:
            return 0
