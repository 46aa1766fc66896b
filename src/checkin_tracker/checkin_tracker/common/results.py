from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterator, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ReadResult(Generic[T]):
    """Outcome of a read that may have degraded.

    When a backing store fails the read still succeeds with whatever could be
    gathered (possibly nothing) and `error` carries the reason, so the web
    layer can show a banner instead of a 500.
    """

    items: Tuple[T, ...] = ()
    error: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.error is not None

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
