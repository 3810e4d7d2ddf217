from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("decodeways")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .counter import ClusterCounter, DecodeReport, count_decodings, iter_clusters
from .errors import (
    DecodeError,
    EmptyInput,
    InvalidStartCharacter,
    InvalidZeroPlacement,
    LeadingZero,
    NonDigitCharacter,
)
from .fibcache import FibonacciCache, default_cache, fibonacci
from .runtime import APPLY, CFG

__all__ = [
    "APPLY",
    "CFG",
    "ClusterCounter",
    "DecodeError",
    "DecodeReport",
    "EmptyInput",
    "FibonacciCache",
    "InvalidStartCharacter",
    "InvalidZeroPlacement",
    "LeadingZero",
    "NonDigitCharacter",
    "__version__",
    "count_decodings",
    "default_cache",
    "fibonacci",
    "iter_clusters",
]
