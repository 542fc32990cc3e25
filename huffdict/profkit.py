# huffdict/profkit.py: ultra-light profiling helpers for dictionary builds
# Toggle via env var: set HUFFDICT_PROFILE=1 to enable; otherwise every call is a no-op.

import time
from collections import defaultdict
from contextlib import contextmanager

from huffdict.settings import PROFILE_ENABLED

ENABLED = PROFILE_ENABLED
COUNTERS = defaultdict(float)  # str -> float (counts / milliseconds)

def tick(name: str, n: float = 1.0):
    if ENABLED:
        COUNTERS[name] += n

@contextmanager
def timeit(name: str):
    if not ENABLED:
        yield
        return
    t0 = time.perf_counter()
    try:
        yield
    finally:
        COUNTERS[name] += (time.perf_counter() - t0) * 1000.0  # ms

def reset():
    COUNTERS.clear()

def snapshot() -> dict:
    """Copy of the current counters, sorted by name."""
    return {k: COUNTERS[k] for k in sorted(COUNTERS)}
