# src/decodeways/fibcache.py
"""
Append-only table of Fibonacci numbers (F0=0, F1=1) backed by gmpy2 bigints.

The table is extended lazily up to the largest index ever requested and never
recomputed, so a session of lookups costs amortized O(1) per call.
"""

from __future__ import annotations

import threading
from operator import index as _as_index

import gmpy2


class FibonacciCache:
    def __init__(self) -> None:
        self._table: list[gmpy2.mpz] = [gmpy2.mpz(0), gmpy2.mpz(1)]
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"FibonacciCache(frontier={len(self._table) - 1})"

    def fibonacci(self, n: int) -> gmpy2.mpz:
        """Return F(n), extending the table from the frontier up to n if needed."""
        n = _as_index(n)
        if n < 0:
            raise ValueError(f"Fibonacci index must be >= 0, got {n}")

        table = self._table
        if n < len(table):
            return table[n]

        with self._lock:
            # another thread may have extended past n while we waited
            for _ in range(len(table), n + 1):
                table.append(table[-1] + table[-2])
        return table[n]

    __call__ = fibonacci


_DEFAULT: FibonacciCache | None = None
_DEFAULT_LOCK = threading.Lock()


def default_cache() -> FibonacciCache:
    """Process-wide shared cache for callers that do not bring their own."""
    global _DEFAULT
    if _DEFAULT is None:
        with _DEFAULT_LOCK:
            if _DEFAULT is None:
                _DEFAULT = FibonacciCache()
    return _DEFAULT


def fibonacci(n: int) -> gmpy2.mpz:
    return default_cache().fibonacci(n)
