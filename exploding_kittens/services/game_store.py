"""Redis service layer for the game.

- Routers should not call Redis directly; they call this module.
- Every redis.RedisError is converted into StoreError here.
- Commands are independent: nothing in this module is transactional.
"""

import logging
from typing import Dict, List

from redis import RedisError
from redis.asyncio import Redis

from exploding_kittens.errors import StoreError

DECK_KEY = "deck"
GAME_STATE_KEY = "game_state"
SAVED_GAME_STATE_KEY = "saved_game_state"
USER_KEY_PREFIX = "user:"
GAME_STARTED = "started"

logger = logging.getLogger(__name__)


def user_key(username: str) -> str:
    return f"{USER_KEY_PREFIX}{username}"


async def reset_deck(redis: Redis, cards: List[str]) -> None:
    """Replace the deck so that LPOP returns ``cards`` in order.

    Args:
        redis (Redis): Redis connection object.
        cards (List[str]): Shuffled card labels.
    """
    try:
        await redis.delete(DECK_KEY)
        await redis.rpush(DECK_KEY, *cards)
    except RedisError as e:
        logger.error(f"Failed to reset deck: {e}")
        raise StoreError(str(e)) from e


async def mark_game_started(redis: Redis) -> None:
    try:
        await redis.set(GAME_STATE_KEY, GAME_STARTED)
    except RedisError as e:
        logger.error(f"Failed to set game state: {e}")
        raise StoreError(str(e)) from e


async def read_game_state(redis: Redis, error_message: str) -> str | None:
    """Read the global game state flag.

    Args:
        redis (Redis): Redis connection object.
        error_message (str): Message reported to the client if Redis fails.

    Returns:
        str | None: The stored flag, None if the game was never started.
    """
    try:
        return await redis.get(GAME_STATE_KEY)
    except RedisError as e:
        logger.error(f"Failed to read game state: {e}")
        raise StoreError(error_message) from e


async def pop_card(redis: Redis) -> str:
    """Pop the next card off the front of the deck.

    An exhausted deck is reported as a store error, same as a failed pop.
    """
    try:
        card = await redis.lpop(DECK_KEY)
    except RedisError as e:
        logger.error(f"Failed to pop card: {e}")
        raise StoreError("Failed to draw card") from e
    if card is None:
        logger.error("Failed to pop card: deck is empty")
        raise StoreError("Failed to draw card")
    return card


async def save_game_state(redis: Redis, game_state: str) -> None:
    try:
        await redis.set(SAVED_GAME_STATE_KEY, game_state)
    except RedisError as e:
        logger.error(f"Failed to save game state: {e}")
        raise StoreError("Failed to save game state") from e


async def save_user_score(redis: Redis, username: str, score: int) -> None:
    """Upsert the leaderboard entry for ``username``. Last write wins."""
    try:
        await redis.set(user_key(username), score)
    except RedisError as e:
        logger.error(f"Failed to save score for {username}: {e}")
        raise StoreError("Failed to save user score") from e


async def read_leaderboard(redis: Redis) -> Dict[str, int]:
    """Collect every ``user:<name>`` entry into a username -> score mapping.

    One unreadable entry fails the whole read.

    Returns:
        Dict[str, int]: Scores keyed by username, in no particular order.
    """
    try:
        keys = [key async for key in redis.scan_iter(match=f"{USER_KEY_PREFIX}*")]
    except RedisError as e:
        logger.error(f"Failed to list leaderboard keys: {e}")
        raise StoreError("Failed to retrieve leaderboard data") from e

    leaderboard: Dict[str, int] = {}
    for key in keys:
        username = key[len(USER_KEY_PREFIX):]
        try:
            value = await redis.get(key)
            leaderboard[username] = int(value)
        except (RedisError, TypeError, ValueError) as e:
            logger.error(f"Failed to read score for {username}: {e}")
            raise StoreError("Failed to retrieve user score") from e
    return leaderboard
