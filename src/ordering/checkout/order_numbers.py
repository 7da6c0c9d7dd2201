"""Order number minting.

Order numbers look like ``ORD1718035200123-000``: the epoch milliseconds of
the checkout followed by a per-millisecond sequence. The sequence makes
numbers unique within the minter's lifetime even when several checkouts land
in the same millisecond or the wall clock steps backwards.
"""

import threading
import time


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class OrderNumberMinter:
    def __init__(self, clock=_epoch_millis, prefix: str = "ORD"):
        self._clock = clock
        self._prefix = prefix
        self._lock = threading.Lock()
        self._last_ms = -1
        self._seq = 0

    def mint(self) -> str:
        with self._lock:
            now = self._clock()
            if now > self._last_ms:
                self._last_ms = now
                self._seq = 0
            else:
                self._seq += 1
            return f"{self._prefix}{self._last_ms}-{self._seq:03d}"
