"""Trait exercises: appending "Bar" and comparing licences."""

from __future__ import annotations

from dataclasses import dataclass
from functools import singledispatch


@singledispatch
def append_bar(value: object) -> object:
    """Return the value with "Bar" appended."""
    raise TypeError(f"cannot append Bar to {type(value).__name__}")


@append_bar.register
def _(value: str) -> str:
    return value + "Bar"


@append_bar.register
def _(value: list) -> list:
    return [*value, "Bar"]


class Licensed:
    """Something that carries licensing information."""

    def licensing_info(self) -> str:
        """Return the licensing information."""
        return "some information"


@dataclass
class SomeSoftware(Licensed):
    """A licensed piece of software."""


@dataclass
class OtherSoftware(Licensed):
    """Another licensed piece of software."""


def compare_license_types(software: Licensed, software_two: Licensed) -> bool:
    """Return True when both carry the same licensing information."""
    return software.licensing_info() == software_two.licensing_info()