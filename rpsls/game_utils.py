"""Shared gameplay utilities: the choice catalogue and the round rules."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping

ROCK, PAPER, SCISSORS, LIZARD, SPOCK = 1, 2, 3, 4, 5
CHOICE_COUNT = 5


@dataclass(frozen=True)
class Choice:
    id: int
    name: str


class Outcome(str, Enum):
    WIN = "win"
    LOSE = "lose"
    TIE = "tie"


@dataclass(frozen=True)
class RoundOutcome:
    player: int
    computer: int
    outcome: Outcome

    def to_dict(self) -> Dict[str, object]:
        return {"results": self.outcome.value, "player": self.player, "computer": self.computer}


CHOICES: tuple = (
    Choice(ROCK, "Rock"),
    Choice(PAPER, "Paper"),
    Choice(SCISSORS, "Scissors"),
    Choice(LIZARD, "Lizard"),
    Choice(SPOCK, "Spock"),
)

_CHOICES_BY_ID: Mapping[int, Choice] = MappingProxyType({c.id: c for c in CHOICES})

# choice id -> ids it defeats
BEATS: Mapping[int, FrozenSet[int]] = MappingProxyType({
    ROCK: frozenset({SCISSORS, LIZARD}),
    PAPER: frozenset({ROCK, SPOCK}),
    SCISSORS: frozenset({PAPER, LIZARD}),
    LIZARD: frozenset({SPOCK, PAPER}),
    SPOCK: frozenset({SCISSORS, ROCK}),
})


def list_choices() -> List[Choice]:
    """Return every playable choice in id order."""
    return list(CHOICES)


def get_choice(choice_id: int) -> Choice:
    """Return the choice bound to ``choice_id``; raises ``KeyError`` when unknown."""
    return _CHOICES_BY_ID[choice_id]


def is_valid_choice(choice_id: int) -> bool:
    return choice_id in _CHOICES_BY_ID


def fold(raw: int) -> int:
    """Map an arbitrary integer onto a choice id in ``[1, 5]``.

    Not uniform unless the source range is a multiple of five.
    """
    return raw % CHOICE_COUNT + 1


def outcome(player: int, computer: int) -> Outcome:
    """Compute the round outcome from the player's perspective."""
    if player == computer:
        return Outcome.TIE
    return Outcome.WIN if computer in BEATS[player] else Outcome.LOSE


def resolve(player: int, computer: int) -> RoundOutcome:
    return RoundOutcome(player=player, computer=computer, outcome=outcome(player, computer))


__all__ = [
    "Choice",
    "Outcome",
    "RoundOutcome",
    "CHOICES",
    "BEATS",
    "list_choices",
    "get_choice",
    "is_valid_choice",
    "fold",
    "outcome",
    "resolve",
]
