"""Fixed-size page storage."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import ClassVar, TypeVar

__all__ = ["PageStorage", "MemStore"]

_S = TypeVar("_S", bound="PageStorage")


class PageStorage(ABC):
    """Reads and writes numbered pages of ``PAGE_SIZE`` bytes."""

    PAGE_SIZE: ClassVar[int]

    @classmethod
    @abstractmethod
    def open(cls: type[_S], key: str, total_pages: int) -> _S:
        """Open the storage named ``key`` with ``total_pages`` pages."""

    @abstractmethod
    def read_page(self, page_idx: int) -> bytes:
        """Return page ``page_idx``; pages are numbered from 0."""

    @abstractmethod
    def write_page(self, page_idx: int, data: bytes) -> None:
        """Replace page ``page_idx`` with ``data``."""

    @abstractmethod
    def pages_len(self) -> int:
        """Return the number of pages."""


class MemStore(PageStorage):
    """Page storage held in memory, safe to share between threads."""

    PAGE_SIZE: ClassVar[int] = 4096

    def __init__(self, total_pages: int) -> None:
        if total_pages < 0:
            raise ValueError("total_pages must not be negative")
        self._data = bytearray(total_pages * self.PAGE_SIZE)
        self._lock = threading.Lock()

    @classmethod
    def open(cls, key: str, total_pages: int) -> MemStore:
        """Create a zero-filled store; ``key`` is ignored."""
        return cls(total_pages)

    def _span(self, page_idx: int) -> slice:
        if not 0 <= page_idx < self.pages_len():
            raise IndexError(f"page {page_idx} out of range")
        start = page_idx * self.PAGE_SIZE
        return slice(start, start + self.PAGE_SIZE)

    def read_page(self, page_idx: int) -> bytes:
        span = self._span(page_idx)
        with self._lock:
            return bytes(self._data[span])

    def write_page(self, page_idx: int, data: bytes) -> None:
        if len(data) != self.PAGE_SIZE:
            raise ValueError(f"page data must be {self.PAGE_SIZE} bytes, got {len(data)}")
        span = self._span(page_idx)
        with self._lock:
            self._data[span] = data

    def pages_len(self) -> int:
        return len(self._data) // self.PAGE_SIZE