"""String helpers and a package with shipping logic."""

from __future__ import annotations

from dataclasses import dataclass

_U32_MAX = 2**32 - 1
MIN_WEIGHT_IN_GRAMS = 10


def trim_me(text: str) -> str:
    """Remove whitespace from both ends."""
    return text.strip()


def compose_me(text: str) -> str:
    """Append " world!"."""
    return f"{text} world!"


def replace_me(text: str) -> str:
    """Replace every "cars" with "balloons"."""
    return text.replace("cars", "balloons")


@dataclass(frozen=True)
class Package:
    """A package to ship between two countries."""

    sender_country: str
    recipient_country: str
    weight_in_grams: int

    def __post_init__(self) -> None:
        if self.weight_in_grams < MIN_WEIGHT_IN_GRAMS:
            raise ValueError("Can not ship a package with weight below 10 grams.")

    def is_international(self) -> bool:
        """Return True when sender and recipient countries differ."""
        return self.sender_country != self.recipient_country

    def get_fees(self, cents_per_gram: int) -> int:
        """Return the shipping fee in cents."""
        fees = cents_per_gram * self.weight_in_grams
        if fees > _U32_MAX:
            raise OverflowError("attempt to multiply with overflow")
        return fees