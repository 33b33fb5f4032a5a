"""Container exercises: optional values, messages, lists, cons lists and copy-on-write."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass, field

_U16_MAX = 2**16 - 1


def maybe_icecream(time_of_day: int) -> int | None:
    """Return the ice cream left at an hour of the day, or None for invalid hours."""
    if not 0 <= time_of_day <= _U16_MAX:
        raise ValueError("time_of_day must fit in an unsigned 16-bit integer")
    if time_of_day > 23:
        return None
    return 5 if time_of_day < 22 else 0


@dataclass
class Point:
    """A position on a grid."""

    x: int
    y: int


@dataclass(frozen=True)
class Quit:
    """Ask the state to quit."""


@dataclass(frozen=True)
class Echo:
    """Replace the state's message."""

    text: str


@dataclass(frozen=True)
class Move:
    """Move to a new position."""

    point: Point


@dataclass(frozen=True)
class ChangeColor:
    """Change the colour to an RGB triple."""

    red: int
    green: int
    blue: int


Message = Quit | Echo | Move | ChangeColor


@dataclass
class State:
    """State changed by processing messages."""

    color: tuple[int, int, int] = (0, 0, 0)
    position: Point = field(default_factory=lambda: Point(0, 0))
    quit: bool = False
    message: str = ""

    def process(self, message: Message) -> None:
        """Apply a message to the state."""
        match message:
            case Quit():
                self.quit = True
            case Echo(text=text):
                self.message = text
            case Move(point=point):
                self.position = point
            case ChangeColor(red=red, green=green, blue=blue):
                self.color = (red, green, blue)
            case _:
                raise TypeError(f"unknown message: {message!r}")


def vec_loop(values: list[int]) -> list[int]:
    """Double every element in place and return the same list."""
    values[:] = [value * 2 for value in values]
    return values


def vec_map(values: Sequence[int]) -> list[int]:
    """Return a new list with every element doubled."""
    return [value * 2 for value in values]


@dataclass(frozen=True)
class Cons:
    """A cell of a cons list; None marks the end of the list."""

    value: int
    next: Cons | None = None


def create_empty_list() -> Cons | None:
    """Return the empty cons list."""
    return None


def create_non_empty_list() -> Cons:
    """Return a cons list holding 1 and 2."""
    return Cons(1, Cons(2))


def abs_all(values: Sequence[int]) -> Sequence[int]:
    """Make every element non-negative, copying only when needed.

    A mutable sequence is changed in place and returned. Any other sequence is
    returned unchanged if it holds no negatives, otherwise a new list is returned.
    """
    if isinstance(values, MutableSequence):
        for i, value in enumerate(values):
            if value < 0:
                values[i] = -value
        return values
    if any(value < 0 for value in values):
        return [abs(value) for value in values]
    return values