"""A value that can be assigned only once."""

import threading
from typing import Generic, TypeVar

T = TypeVar("T")


class OnceValue(Generic[T]):
    """Keeps the first value given to set(); later calls are ignored."""

    def __init__(self) -> None:
        self.value: T | None = None
        self._done = False
        self._lock = threading.Lock()

    def set(self, value: T) -> None:
        with self._lock:
            if not self._done:
                self.value, self._done = value, True