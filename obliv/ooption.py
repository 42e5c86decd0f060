"""An optional value whose presence is a plain flag, for branch-free code."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from obliv.cmov import cmov, cxchg

T = TypeVar("T")

__all__ = ["OOption"]


@dataclass(order=True)
class OOption(Generic[T]):
    """A value together with a flag telling whether it is present."""

    value: Any = 0
    is_some: bool = False

    def unwrap(self) -> T:
        """Return the value; raise ``ValueError`` if it is absent."""
        if not self.is_some:
            raise ValueError("called unwrap on an OOption that is None")
        return cmov(None, self.value, self.is_some)

    def unwrap_or_default(self, default: T) -> T:
        """Return the value if present, otherwise ``default``."""
        return cmov(default, self.value, self.is_some)

    def cmov(self, other: OOption[T], choice: bool) -> None:
        """Copy ``other`` into this option if ``choice`` is true."""
        self.value = cmov(self.value, other.value, choice)
        self.is_some = cmov(self.is_some, other.is_some, choice)

    def cxchg(self, other: OOption[T], choice: bool) -> None:
        """Exchange contents with ``other`` if ``choice`` is true."""
        self.value, other.value = cxchg(self.value, other.value, choice)
        self.is_some, other.is_some = cxchg(self.is_some, other.is_some, choice)