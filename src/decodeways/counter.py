# src/decodeways/counter.py
"""
Count the decodings of a digit string under A=1 ... Z=26.

A pair of adjacent digits is *ambiguous* when it reads either as one letter
(11..19, 21..26) or as two. A maximal run of k consecutive ambiguous pairs
(a cluster) can be decoded in F(k+2) ways, and runs separated by a
non-ambiguous pair decode independently, so the total is the product of one
Fibonacci factor per cluster:

    "1"     -> no cluster                   -> 1
    "11"    -> one cluster, k=1             -> F(3) = 2
    "226"   -> one cluster, k=2             -> F(4) = 3
    "12310" -> k=1 ("12"), closed by "23"   -> F(3) = 2
    "1110"  -> k=2 ("111"), closed by "10"  -> F(4) = 3

Validation happens in the same left-to-right pass and stops at the first
offending byte.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

import gmpy2

from decodeways.errors import (
    EmptyInput,
    InvalidStartCharacter,
    InvalidZeroPlacement,
    LeadingZero,
    NonDigitCharacter,
)
from decodeways.fibcache import FibonacciCache, default_cache
from decodeways.utility import (
    ZERO,
    can_precede_zero,
    is_ambiguous_pair,
    is_digit,
    is_nonzero_digit,
)

DigitSequence = Union[bytes, bytearray, memoryview, str]


@dataclass(frozen=True)
class DecodeReport:
    count: int
    length: int                # bytes scanned
    clusters: int              # maximal ambiguous runs
    longest_cluster: int       # ambiguous pairs in the longest run (0 if none)


def _as_buffer(sequence: DigitSequence) -> memoryview:
    # one byte per character so reported positions match the text
    if isinstance(sequence, str):
        sequence = sequence.encode("ascii", errors="replace")
    view = memoryview(sequence)
    if view.ndim != 1 or view.format != "B":
        view = view.cast("B")
    return view


def iter_clusters(sequence: DigitSequence) -> Iterator[int]:
    """
    Validate `sequence` and yield the length of each maximal ambiguous
    cluster, left to right. Every non-ambiguous pair closes the open
    cluster, 10 and 20 included, and a cluster still open at the end is
    flushed the same way.

    Raises a DecodeError subclass at the first invalid byte; clusters
    already yielded must then be discarded.
    """
    data = _as_buffer(sequence)
    if len(data) == 0:
        raise EmptyInput()

    a = data[0]
    if a == ZERO:
        raise LeadingZero()
    if not is_nonzero_digit(a):
        raise InvalidStartCharacter(a)

    run = 0
    for i, b in enumerate(data[1:]):
        if not is_digit(b):
            raise NonDigitCharacter(b, i)
        if b == ZERO and not can_precede_zero(a):
            raise InvalidZeroPlacement(a, i)

        if is_ambiguous_pair(a, b):
            run += 1
        elif run:
            yield run
            run = 0
        a = b

    # string ended inside a cluster
    if run:
        yield run


class ClusterCounter:
    """
    Validator/counter bound to one FibonacciCache.

    Pass a cache to share it between counters; by default each counter owns
    a fresh one.
    """

    def __init__(self, cache: FibonacciCache | None = None):
        self.cache = cache if cache is not None else FibonacciCache()

    def analyze(self, sequence: DigitSequence) -> DecodeReport:
        data = _as_buffer(sequence)
        fib = self.cache.fibonacci
        acc = gmpy2.mpz(1)
        clusters = 0
        longest = 0
        for run in iter_clusters(data):
            acc *= fib(run + 2)
            clusters += 1
            if run > longest:
                longest = run
        return DecodeReport(
            count=int(acc),
            length=len(data),
            clusters=clusters,
            longest_cluster=longest,
        )

    def count(self, sequence: DigitSequence) -> int:
        """Number of ways `sequence` can be decoded."""
        return self.analyze(sequence).count


def count_decodings(sequence: DigitSequence, cache: FibonacciCache | None = None) -> int:
    """Convenience wrapper; uses the shared default cache unless one is given."""
    return ClusterCounter(cache if cache is not None else default_cache()).count(sequence)
