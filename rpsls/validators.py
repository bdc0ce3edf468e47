"""Request validation for the game endpoints."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from rpsls.game_utils import CHOICE_COUNT, is_valid_choice

MISSING_REQUEST_MESSAGE = "Command cannot be null."
PLAY_FORMAT_MESSAGE = 'Format of request has to be: {"Player":[int]}.'
PLAYER_RANGE_MESSAGE = f"Player choice must be between 1 and {CHOICE_COUNT}."


class InvalidPlayRequest(ValueError):
    """Raised when a play request cannot be turned into a round."""

    label = "Invalid input"

    @property
    def detail(self) -> str:
        return f"{self.label}: {self}"


class MissingPlayRequest(InvalidPlayRequest):
    label = "Invalid request"


class PlayRequest(BaseModel):
    # older clients send "Player"
    model_config = ConfigDict(populate_by_name=True)

    player: Optional[int] = Field(default=None, alias="Player")


def validate_play_request(request: Optional[PlayRequest]) -> int:
    """Return the validated player choice id or raise ``InvalidPlayRequest``."""
    if request is None:
        raise MissingPlayRequest(MISSING_REQUEST_MESSAGE)
    if not request.player:
        raise InvalidPlayRequest(PLAY_FORMAT_MESSAGE)
    if not is_valid_choice(request.player):
        raise InvalidPlayRequest(PLAYER_RANGE_MESSAGE)
    return request.player
