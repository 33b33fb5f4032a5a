"""Hash map exercises: fruit baskets and a football scores table."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_U8_MAX = 255
_UNSIGNED = re.compile(r"\+?[0-9]+", re.ASCII)


def fruit_basket() -> dict[str, int]:
    """Return a basket with at least three kinds and five pieces of fruit."""
    return {"banana": 2, "apple": 3, "mango": 1}


class Fruit(Enum):
    """Kinds of fruit for the cake."""

    APPLE = "apple"
    BANANA = "banana"
    MANGO = "mango"
    LYCHEE = "lychee"
    PINEAPPLE = "pineapple"


def fill_fruit_basket(basket: dict[Fruit, int]) -> None:
    """Add one of every fruit kind missing from the basket, leaving others untouched."""
    for fruit in Fruit:
        basket.setdefault(fruit, 1)


@dataclass
class Team:
    """Goals a team has scored and conceded."""

    goals_scored: int = 0
    goals_conceded: int = 0

    def record(self, scored: int, conceded: int) -> None:
        """Add the goals of one match."""
        self.goals_scored = _add_u8(self.goals_scored, scored)
        self.goals_conceded = _add_u8(self.goals_conceded, conceded)


def _add_u8(a: int, b: int) -> int:
    total = a + b
    if total > _U8_MAX:
        raise OverflowError("attempt to add with overflow")
    return total


def _parse_goals(text: str) -> int:
    if not _UNSIGNED.fullmatch(text) or int(text) > _U8_MAX:
        raise ValueError(f"invalid goal count: {text!r}")
    return int(text)


def _lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def build_scores_table(results: str) -> dict[str, Team]:
    """Build a table of goals per team from "team1,team2,goals1,goals2" lines."""
    scores: dict[str, Team] = {}
    for line in _lines(results):
        fields = line.split(",")
        if len(fields) < 4:
            raise ValueError(f"malformed result line: {line!r}")
        team_1_name, team_2_name = fields[0], fields[1]
        team_1_score = _parse_goals(fields[2])
        team_2_score = _parse_goals(fields[3])
        scores.setdefault(team_1_name, Team()).record(team_1_score, team_2_score)
        scores.setdefault(team_2_name, Team()).record(team_2_score, team_1_score)
    return scores