# src/decodeways/dataio.py
from __future__ import annotations

import mmap
import os
from pathlib import Path

_ASCII_WHITESPACE = b" \t\r\n\v\f"


def read_digits(path: str | os.PathLike[str]) -> bytes:
    """
    Read the whole file as bytes.

    Non-empty files are read through a read-only memory map; empty files
    (which cannot be mapped) return b"". OSError subclasses propagate.
    """
    p = Path(path)
    with p.open("rb") as f:
        size = os.fstat(f.fileno()).st_size
        if size == 0:
            return b""
        with mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ) as mm:
            return mm[:]


def strip_ascii_whitespace(data: bytes) -> bytes:
    """Drop surrounding ASCII whitespace, e.g. the newline editors append."""
    return data.strip(_ASCII_WHITESPACE)
