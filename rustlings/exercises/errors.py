"""Error handling exercises: name tags, token costs and positive integers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_SIGNED = re.compile(r"[+-]?[0-9]+", re.ASCII)
_I32_RANGE = (-(2**31), 2**31 - 1)
_I64_RANGE = (-(2**63), 2**63 - 1)

PROCESSING_FEE = 1
COST_PER_ITEM = 5


def _parse_int(text: str, bounds: tuple[int, int]) -> int:
    """Parse a signed integer the strict way; raise ValueError on bad input."""
    if not text:
        raise ValueError("cannot parse integer from empty string")
    if not _SIGNED.fullmatch(text):
        raise ValueError("invalid digit found in string")
    value = int(text)
    low, high = bounds
    if value > high:
        raise ValueError("number too large to fit in target type")
    if value < low:
        raise ValueError("number too small to fit in target type")
    return value


def generate_nametag_text(name: str) -> str:
    """Return the name tag text; raise ValueError for an empty name."""
    if not name:
        raise ValueError("`name` was empty; it must be nonempty.")
    return f"Hi! My name is {name}"


def total_cost(item_quantity: str) -> int:
    """Return the token cost of the typed quantity; raise ValueError if it is not a number."""
    qty = _parse_int(item_quantity, _I32_RANGE)
    cost = qty * COST_PER_ITEM + PROCESSING_FEE
    low, high = _I32_RANGE
    if not low <= cost <= high:
        raise OverflowError("attempt to multiply with overflow")
    return cost


def purchase(tokens: int, item_quantity: str) -> int:
    """Buy the typed quantity if affordable and return the tokens left."""
    cost = total_cost(item_quantity)
    if cost > tokens:
        print("You can't afford that many!")
        return tokens
    tokens -= cost
    print(f"You now have {tokens} tokens.")
    return tokens


class CreationErrorKind(Enum):
    """Why a positive non-zero integer could not be created."""

    NEGATIVE = "number is negative"
    ZERO = "number is zero"


class CreationError(ValueError):
    """Raised when a value is not a positive non-zero integer."""

    def __init__(self, kind: CreationErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CreationError):
            return NotImplemented
        return self.kind is other.kind

    def __hash__(self) -> int:
        return hash(self.kind)


class ParsePosNonzeroError(ValueError):
    """Raised when text does not hold a positive non-zero integer.

    Exactly one of ``creation`` and ``parse_int`` is set, naming the cause.
    """

    def __init__(self, cause: ValueError) -> None:
        super().__init__(str(cause))
        self.creation: CreationError | None = (
            cause if isinstance(cause, CreationError) else None
        )
        self.parse_int: ValueError | None = (
            None if isinstance(cause, CreationError) else cause
        )


@dataclass(frozen=True)
class PositiveNonzeroInteger:
    """An integer greater than zero."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise CreationError(CreationErrorKind.NEGATIVE)
        if self.value == 0:
            raise CreationError(CreationErrorKind.ZERO)

    @classmethod
    def new(cls, value: int) -> "PositiveNonzeroInteger":
        """Create the integer; raise CreationError for negative numbers or zero."""
        return cls(value)


def parse_pos_nonzero(s: str) -> PositiveNonzeroInteger:
    """Parse a positive non-zero integer; raise ParsePosNonzeroError otherwise."""
    try:
        value = _parse_int(s, _I64_RANGE)
    except ValueError as exc:
        raise ParsePosNonzeroError(exc) from exc
    try:
        return PositiveNonzeroInteger.new(value)
    except CreationError as exc:
        raise ParsePosNonzeroError(exc) from exc