"""Time-derived identifiers for orders and newly created products."""

import threading
import time

_lock = threading.Lock()
_last_stamp = 0


def time_derived_id(prefix: str) -> str:
    """Return ``<prefix><epoch-ms>``, strictly increasing within the process."""
    global _last_stamp

    with _lock:
        stamp = time.time_ns() // 1_000_000
        if stamp <= _last_stamp:
            stamp = _last_stamp + 1
        _last_stamp = stamp

    return f"{prefix}{stamp}"
