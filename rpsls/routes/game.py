"""
Game route handlers.
Lists the choices, draws a random choice, and plays a round against the computer.
"""
from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel
from typing import List, Optional
import logging

from rpsls.game_service import GameService, get_game_service
from rpsls.validators import InvalidPlayRequest, PlayRequest, validate_play_request

logger = logging.getLogger(__name__)

router = APIRouter()

INTERNAL_ERROR_DETAIL = "Internal server error. Please try again later."


class ChoiceResponse(BaseModel):
    id: int
    name: str


class GameResultResponse(BaseModel):
    results: str
    player: int
    computer: int


@router.get("/choices", response_model=List[ChoiceResponse])
def get_choices(service: GameService = Depends(get_game_service)):
    """Return all five playable choices"""
    try:
        logger.info("Fetching available choices.")
        choices = service.get_choices()
        logger.info("Successfully retrieved %d choices.", len(choices))
        return [ChoiceResponse(id=c.id, name=c.name) for c in choices]
    except Exception:
        logger.exception("An error occurred while fetching choices.")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_DETAIL)


@router.get("/choice", response_model=ChoiceResponse)
def get_random_choice(service: GameService = Depends(get_game_service)):
    """Return one choice picked with the external random source"""
    try:
        logger.info("Fetching a random choice.")
        choice = service.get_random_choice()
        logger.info("Successfully retrieved a random choice: %s.", choice.name)
        return ChoiceResponse(id=choice.id, name=choice.name)
    except Exception:
        logger.exception("An error occurred while fetching a random choice.")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_DETAIL)


@router.post("/play", response_model=GameResultResponse)
def play(
    request: Optional[PlayRequest] = Body(default=None),
    service: GameService = Depends(get_game_service),
):
    """Play one round of Rock-Paper-Scissors-Lizard-Spock against the computer"""
    try:
        player = validate_play_request(request)
    except InvalidPlayRequest as exc:
        logger.warning("Invalid play request: %s", exc.detail)
        raise HTTPException(status_code=400, detail=exc.detail)

    try:
        logger.info("Playing game with player choice: %s.", player)
        result = service.play_round(player)
        logger.info("Game played successfully. Result: %s.", result.outcome.value)
        return GameResultResponse(**result.to_dict())
    except Exception:
        logger.exception("An error occurred while playing the game.")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_DETAIL)
