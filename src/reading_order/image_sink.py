from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ImageSink(ABC):
    """
    Destination for decoded page images.

    Implementations must raise on failure; the line assembler treats any
    exception from `save` as a skipped image, never as a page failure.
    """

    @abstractmethod
    def save(self, image: Any, filename: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def file_size(self, filename: str) -> int:
        """Stored size in bytes, or 0 when unavailable."""

        raise NotImplementedError
