import logging
import random
import time
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from redis.asyncio import Redis

from exploding_kittens.domain.deck_rules import describe_card, new_deck, shuffle_deck
from exploding_kittens.errors import PreconditionError, StoreError
from exploding_kittens.models.game_models import (
    DrawCardModel,
    ErrorModel,
    LeaderboardModel,
    MessageModel,
    SaveGameRequestModel,
    StartGameModel,
)
from exploding_kittens.redis_client import get_redis
from exploding_kittens.services import game_store

game_router = APIRouter()

# Seeded once per process; shuffles only need to be unpredictable enough for a toy game.
rng = random.Random(time.time_ns())

STORE_ERROR_RESPONSES = {500: {"model": ErrorModel}}
ERROR_RESPONSES = {400: {"model": ErrorModel}, **STORE_ERROR_RESPONSES}


class GameServer:
    @staticmethod
    @game_router.post(
        "/start-game", response_model=StartGameModel, responses=STORE_ERROR_RESPONSES
    )
    async def start_game(redis: Redis = Depends(get_redis)) -> StartGameModel:
        """Shuffle a new deck, store it and mark the game as started

        Returns:
            StartGameModel: The shuffled deck in draw order
        """
        cards = shuffle_deck(new_deck(), rng)

        await game_store.reset_deck(redis, cards)
        await game_store.mark_game_started(redis)
        logging.info(f"Game started with {len(cards)} cards")

        return StartGameModel(message="Game started successfully!", deck=cards)

    @staticmethod
    @game_router.post(
        "/draw-card", response_model=DrawCardModel, responses=ERROR_RESPONSES
    )
    async def draw_card(redis: Redis = Depends(get_redis)) -> DrawCardModel:
        """Pop the next card from the deck

        Drawing the exploding kitten does not change any stored state;
        ending the game is left to the client.

        Returns:
            DrawCardModel: Message for the drawn card and its label
        """
        game_state = await game_store.read_game_state(redis, "Game state not found")
        if game_state != game_store.GAME_STARTED:
            raise PreconditionError("Game not started yet")

        label = await game_store.pop_card(redis)
        message, card = describe_card(label)
        logging.debug(f"Card drawn: {label}")

        return DrawCardModel(message=message, card=card)

    @staticmethod
    @game_router.post(
        "/save-game", response_model=MessageModel, responses=ERROR_RESPONSES
    )
    async def save_game(
        save_request: Optional[SaveGameRequestModel] = None,
        redis: Redis = Depends(get_redis),
    ) -> MessageModel:
        """Snapshot the game state and optionally record a leaderboard score

        Args:
            save_request (Optional[SaveGameRequestModel]): username and score, both or neither

        Returns:
            MessageModel: Confirmation message
        """
        game_state = await game_store.read_game_state(
            redis, "Failed to retrieve game state"
        )
        if game_state is None:
            logging.error("Failed to save game: game state is missing")
            raise StoreError("Failed to retrieve game state")

        await game_store.save_game_state(redis, game_state)

        has_score = save_request is not None and save_request.has_score
        if has_score:
            await game_store.save_user_score(
                redis, save_request.username, save_request.score
            )
        logging.info(f"Game saved: state={game_state}, score recorded={has_score}")

        return MessageModel(message="Game state saved successfully")

    @staticmethod
    @game_router.get(
        "/leaderboard", response_model=LeaderboardModel, responses=STORE_ERROR_RESPONSES
    )
    async def get_leaderboard(redis: Redis = Depends(get_redis)) -> LeaderboardModel:
        """Return every saved score keyed by username"""
        leaderboard = await game_store.read_leaderboard(redis)
        logging.info(f"Leaderboard has {len(leaderboard)} entries")
        return leaderboard

    @staticmethod
    @game_router.get("/", response_class=PlainTextResponse)
    async def homepage() -> str:
        return "Welcome to the homepage!"
