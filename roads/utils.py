# roads/utils.py

import time
from functools import wraps
from typing import Callable, Generic, Iterator, List, Optional, Sequence, TypeVar

from loguru import logger

T = TypeVar("T")


def format_time(seconds: float) -> str:
    """
    Format seconds into 'xh ym zs' as appropriate.
    Show only nonzero components.
    """
    seconds_int = int(seconds)
    ms = int((seconds - seconds_int) * 1000)
    h, rem = divmod(seconds_int, 3600)
    m, s = divmod(rem, 60)
    out = []
    if h > 0:
        out.append(f"{h}h")
    if m > 0:
        out.append(f"{m}m")
    if s > 0 or (h == 0 and m == 0):
        if ms > 0 and seconds < 60:
            out.append(f"{s}.{ms:03d}s")
        else:
            out.append(f"{s}s")
    return " ".join(out)


def log_timing(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed = time.perf_counter() - start
            logger.info("{} took {}", func.__name__, format_time(elapsed))

    return wrapper


class WrappingList(Generic[T]):
    """
    A sequence with an optional selected index that wraps around.

    The index is set iff the sequence is non-empty. Replace the whole list
    (build a new one) to reset the selection.
    """

    def __init__(self, data: Optional[Sequence[T]] = None):
        self._data: List[T] = list(data or [])
        self._selected: Optional[int] = 0 if self._data else None

    def __iter__(self) -> Iterator[T]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def selected_ix(self) -> Optional[int]:
        return self._selected

    def selected(self) -> Optional[T]:
        if self._selected is None:
            return None
        return self._data[self._selected]

    def set_selected(self, value: T) -> bool:
        """Replace the selected item in place; False when the list is empty."""
        if self._selected is None:
            return False
        self._data[self._selected] = value
        return True

    def down(self) -> None:
        if not self._data:
            return
        self._selected = ((self._selected or 0) + 1) % len(self._data)

    def up(self) -> None:
        if not self._data:
            return
        n = len(self._data)
        self._selected = ((self._selected or 0) + n - 1) % n


class DotsSpinner:
    """Progress tick cycling through braille glyphs at most every 80 ms."""

    PATTERN = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
    INTERVAL = 0.08

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._state = 0
        self._last_tick: Optional[float] = None

    @property
    def index(self) -> int:
        return self._state

    def tick(self) -> None:
        now = self._clock()
        if self._last_tick is None:
            self._last_tick = now
        elif now - self._last_tick >= self.INTERVAL:
            self._last_tick = now
            self._state = (self._state + 1) % len(self.PATTERN)

    def glyph(self) -> str:
        return self.PATTERN[self._state]
