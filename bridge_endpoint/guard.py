"""Call-scoped reentrancy guard for value-moving endpoint operations."""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from bridge_core.errors import ReentrancyDetectedError


class ReentrancyGuard:
    def __init__(self) -> None:
        self._flag_lock = threading.Lock()
        self._holder: Optional[str] = None

    @property
    def entered(self) -> bool:
        return self._holder is not None

    @contextmanager
    def hold(self, operation: str) -> Iterator[None]:
        with self._flag_lock:
            if self._holder is not None:
                raise ReentrancyDetectedError(
                    f"{operation} entered while {self._holder} is still running."
                )
            self._holder = operation
        try:
            yield
        finally:
            with self._flag_lock:
                self._holder = None
