from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, List, Optional, Tuple

Point = Tuple[float, float]


class TrailBuffer:
    """Time-ordered history of the second bob.

    A single sliding window: ``max_len`` bounds it, ``None`` makes it
    persistent (unbounded). Oldest points drop off first.
    """

    def __init__(self, max_len: Optional[int] = 1000) -> None:
        if max_len is not None and max_len < 1:
            raise ValueError(f"trail max_len must be positive, got {max_len}")
        self._points: Deque[Point] = deque(maxlen=max_len)

    @property
    def max_len(self) -> Optional[int]:
        return self._points.maxlen

    def set_max_len(self, max_len: Optional[int]) -> None:
        """Change the bound, keeping the most recent points."""
        if max_len is not None and max_len < 1:
            raise ValueError(f"trail max_len must be positive, got {max_len}")
        if max_len == self._points.maxlen:
            return
        self._points = deque(self._points, maxlen=max_len)

    def append(self, x: float, y: float) -> None:
        self._points.append((float(x), float(y)))

    def clear(self) -> None:
        self._points.clear()

    def points(self) -> List[Point]:
        return list(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)
