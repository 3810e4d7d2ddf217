"""
Validation errors raised by the cluster counter.

Every error is fatal for the counting call and deterministic for a given
input. ``position`` is the 0-based index among the bytes *after* the first
one; ``offset`` is the absolute byte index in the sequence.
"""

from __future__ import annotations

from decodeways.utility import UserInputError, char_repr


class DecodeError(UserInputError):
    """Base class for digit strings that cannot be decoded."""


class EmptyInput(DecodeError):
    def __init__(self) -> None:
        super().__init__("input is empty")


class LeadingZero(DecodeError):
    def __init__(self) -> None:
        super().__init__("string starts with 0")
        self.offset = 0


class InvalidStartCharacter(DecodeError):
    def __init__(self, char: int) -> None:
        super().__init__("string starts with non-digit character")
        self.char = char
        self.offset = 0


class NonDigitCharacter(DecodeError):
    def __init__(self, char: int, position: int) -> None:
        super().__init__(
            f"encountered non-digit character '{char_repr(char)}' at pos. {position}"
        )
        self.char = char
        self.position = position
        self.offset = position + 1


class InvalidZeroPlacement(DecodeError):
    def __init__(self, previous: int, position: int) -> None:
        super().__init__(
            f"encountered 0 which can not be attached to {chr(previous)} at pos. {position}"
        )
        self.previous = previous
        self.position = position
        self.offset = position + 1


__all__ = [
    "DecodeError",
    "EmptyInput",
    "InvalidStartCharacter",
    "InvalidZeroPlacement",
    "LeadingZero",
    "NonDigitCharacter",
]
