# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import sys

from decodeways.runtime import CFG

# ASCII codes used by the digit checks below
ZERO = ord("0")
ONE = ord("1")
TWO = ord("2")
SIX = ord("6")
NINE = ord("9")


class UserInputError(Exception):
    pass


# --- Digit classification ---------------------------------------------------

def is_digit(b: int) -> bool:
    return ZERO <= b <= NINE


def is_nonzero_digit(b: int) -> bool:
    return ONE <= b <= NINE


def can_precede_zero(a: int) -> bool:
    """Only '1' and '2' can take a trailing 0 (codes 10 and 20)."""
    return a == ONE or a == TWO


def is_ambiguous_pair(a: int, b: int) -> bool:
    """
    True when the pair decodes two ways: 11..19 or 21..26.
    10 and 20 are not ambiguous, the zero pins them to a single letter.
    """
    if a == ONE:
        return ONE <= b <= NINE
    if a == TWO:
        return ONE <= b <= SIX
    return False


def char_repr(b: int) -> str:
    """Printable form of a byte for error messages."""
    if 0x20 <= b < 0x7F:
        return chr(b)
    return f"\\x{b:02x}"


# --- Big integers -------------------------------------------------------------

def dec_digits(n: int) -> int:
    """Exact decimal digit count without str(); handles n >= 0."""
    n = abs(int(n))
    if n == 0:
        return 1
    # floor(log10(n)) ~= floor(bitlen*log10(2))
    bl = n.bit_length()
    est = int((bl * 30103) // 100000)
    # bring into correct decade with at most a couple of steps
    p10 = 10 ** est
    if n < p10:
        while n < p10:
            est -= 1
            p10 //= 10
    else:
        p10 *= 10
        while n >= p10:
            est += 1
            p10 *= 10
    return est + 1


def _effective_digit_limit() -> int | None:
    """
    Profile setting OUTPUT.MAX_DIGITS; 0 or missing means unlimited.
    """
    limit = CFG("OUTPUT.MAX_DIGITS", 0)
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        return None
    return limit if limit > 0 else None


def lift_int_str_limit() -> None:
    """Allow str() of arbitrarily long ints unless the user pinned a limit."""
    try:
        sys.set_int_max_str_digits(0)
    except AttributeError:  # pragma: no cover - interpreters without the guard
        pass


def stringify_guarded(n: int, label: str = "result") -> str:
    """Return str(n) or raise a friendly user error if it exceeds the digit guard."""
    limit = _effective_digit_limit()
    if limit is not None and dec_digits(n) > limit:
        raise UserInputError(
            f"{label} has more than {limit} decimal digits. "
            "Increase OUTPUT.MAX_DIGITS in the profile or use OUTPUT.FORMAT = \"short\"."
        )
    try:
        return str(n)
    except ValueError:
        # Python's own guard (PYTHONINTMAXSTRDIGITS) is stricter than ours
        raise UserInputError(
            f"{label} is too large to be converted to a string under "
            "the current settings. Unset PYTHONINTMAXSTRDIGITS or use "
            "OUTPUT.FORMAT = \"short\"."
        ) from None


# --- Settings helpers ---------------------------------------------------------

def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    out: dict[str, object] = {}
    for k, v in (d or {}).items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out
