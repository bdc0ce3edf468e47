#!/usr/bin/env python3
"""
Rules tests for Rock-Paper-Scissors-Lizard-Spock.
Covers the choice catalogue, folding of raw numbers, and round resolution.
"""
import sys
from itertools import combinations
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from rpsls.game_utils import (
    BEATS,
    CHOICES,
    Outcome,
    fold,
    get_choice,
    is_valid_choice,
    list_choices,
    outcome,
    resolve,
)


def test_choice_catalogue():
    """The five choices are fixed and ordered by id"""
    names = [(c.id, c.name) for c in list_choices()]
    assert names == [
        (1, "Rock"),
        (2, "Paper"),
        (3, "Scissors"),
        (4, "Lizard"),
        (5, "Spock"),
    ], f"Unexpected catalogue: {names}"
    assert get_choice(5).name == "Spock"
    assert not is_valid_choice(0) and not is_valid_choice(6), "Only ids 1..5 are valid"


def test_fold_stays_in_range():
    """Folding maps every integer, including fallback-sized and negative ones, into 1..5"""
    for raw in list(range(-50, 250)) + [10**12, 2**63 - 1]:
        folded = fold(raw)
        assert 1 <= folded <= 5, f"fold({raw}) produced {folded}"


def test_fold_is_periodic():
    """Numbers congruent mod 5 fold to the same choice"""
    for raw in range(0, 100):
        assert fold(raw) == fold(raw + 5) == fold(raw + 500), f"fold not periodic at {raw}"
    assert fold(42) == 3, "42 % 5 + 1 should be Scissors"
    assert fold(5) == 1 and fold(1) == 2


def test_same_choice_ties():
    for choice in CHOICES:
        assert outcome(choice.id, choice.id) is Outcome.TIE, f"{choice.name} vs itself should tie"


def test_beats_relation_is_antisymmetric_and_total():
    """For each distinct pair exactly one side wins"""
    for a, b in combinations(range(1, 6), 2):
        forward, backward = outcome(a, b), outcome(b, a)
        assert {forward, backward} == {Outcome.WIN, Outcome.LOSE}, (
            f"{a} vs {b} gave {forward}/{backward}"
        )
    for choice_id, defeated in BEATS.items():
        assert len(defeated) == 2, f"{choice_id} should beat exactly two choices"
        assert choice_id not in defeated


def test_classic_matchups():
    assert BEATS[1] == {3, 4}, "Rock crushes Scissors and Lizard"
    assert BEATS[2] == {1, 5}, "Paper covers Rock and disproves Spock"
    assert BEATS[3] == {2, 4}, "Scissors cut Paper and decapitate Lizard"
    assert BEATS[4] == {5, 2}, "Lizard poisons Spock and eats Paper"
    assert BEATS[5] == {3, 1}, "Spock smashes Scissors and vaporizes Rock"

    assert outcome(1, 3) is Outcome.WIN
    assert outcome(2, 2) is Outcome.TIE
    assert outcome(5, 2) is Outcome.LOSE


def test_resolve_serializes_round():
    result = resolve(4, 5)
    assert result.outcome is Outcome.WIN
    assert result.to_dict() == {"results": "win", "player": 4, "computer": 5}
