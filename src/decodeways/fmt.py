# src/decodeways/fmt.py
from __future__ import annotations

from decodeways.runtime import CFG
from decodeways.utility import dec_digits, stringify_guarded


def abbr_int_fast(n: int, head: int = 10, tail: int = 10, threshold: int = 35, ellipsis: str = "…") -> str:
    """Abbreviate very large ints as first<head>…last<tail> without str(n)."""
    if not isinstance(n, int):
        return str(n)
    if n == 0:
        return "0"

    sign = "-" if n < 0 else ""
    a = -n if n < 0 else n

    # If not long enough, fall back to normal str()
    d = dec_digits(a)
    if d <= threshold or head + tail >= d:
        return sign + str(a)

    # compute first/last blocks exactly
    first = a // 10 ** (d - head)
    last = a % 10 ** tail
    # zero-pad last block to width 'tail'
    return f"{sign}{first}{ellipsis}{last:0{tail}d}"


def format_count(n: int, *, mode: str | None = None) -> str:
    """
    Render a decode count for stdout.
    mode: "full" | "short" (case-insensitive); defaults to OUTPUT.FORMAT.
    "short" uses FORMATTING.NUM_ABBR_* and appends the digit count when abbreviated.
    """
    if mode is None:
        mode = str(CFG("OUTPUT.FORMAT", "full"))
    m = mode.strip().lower()

    if m == "short":
        head = int(CFG("FORMATTING.NUM_ABBR_HEAD", 10))
        tail = int(CFG("FORMATTING.NUM_ABBR_TAIL", 10))
        ell = str(CFG("FORMATTING.ELLIPSIS", "…"))
        tok = abbr_int_fast(n, head, tail, threshold=head + tail, ellipsis=ell)
        if ell in tok:
            return f"{tok} ({dec_digits(n)} digits)"
        return tok

    return stringify_guarded(n, label="decode count")
