"""
Game service: composes the random source with the round rules.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from rpsls.game_utils import Choice, RoundOutcome, fold, get_choice, list_choices, resolve
from rpsls.metrics import record_round
from rpsls.random_source import RandomSource, get_random_source

logger = logging.getLogger(__name__)


class GameService:
    def __init__(self, random_source: Optional[RandomSource] = None):
        self._random_source = random_source

    @property
    def random_source(self) -> RandomSource:
        # not cached: shutdown replaces the process-wide source
        if self._random_source is not None:
            return self._random_source
        return get_random_source()

    def get_choices(self) -> List[Choice]:
        return list_choices()

    def computer_choice(self) -> int:
        """Draw a choice id in ``[1, 5]`` from the random source."""
        return fold(self.random_source.acquire())

    def get_random_choice(self) -> Choice:
        return get_choice(self.computer_choice())

    def play_round(self, player: int) -> RoundOutcome:
        """Play one round; ``player`` must already be a valid choice id."""
        computer = self.computer_choice()
        result = resolve(player, computer)
        logger.info(
            "Player choice: %s, Computer choice: %s, Result: %s",
            player,
            computer,
            result.outcome.value,
        )
        record_round(result.outcome.value)
        return result


game_service = GameService()


def get_game_service() -> GameService:
    """Get the global game service instance"""
    return game_service
