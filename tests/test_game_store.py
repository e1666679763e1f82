import asyncio

import pytest

from exploding_kittens.errors import StoreError
from exploding_kittens.services import game_store


def test_reset_deck_keeps_pop_order(fake_redis):
    async def scenario():
        await game_store.reset_deck(fake_redis, ["SHUFFLE", "EXPLODE"])
        return [await game_store.pop_card(fake_redis) for _ in range(2)]

    assert asyncio.run(scenario()) == ["SHUFFLE", "EXPLODE"]


def test_pop_card_on_empty_deck(fake_redis):
    with pytest.raises(StoreError) as excinfo:
        asyncio.run(game_store.pop_card(fake_redis))
    assert excinfo.value.message == "Failed to draw card"
    assert excinfo.value.status_code == 500


def test_read_game_state_absent(fake_redis):
    assert asyncio.run(game_store.read_game_state(fake_redis, "unused")) is None


def test_save_user_score_stores_integer_text(fake_redis):
    asyncio.run(game_store.save_user_score(fake_redis, "dave", 9))
    assert fake_redis.strings["user:dave"] == "9"


def test_read_leaderboard_strips_prefix(fake_redis):
    fake_redis.strings["user:erin"] = "4"
    fake_redis.strings["user:user:frank"] = "2"
    fake_redis.strings["saved_game_state"] = "started"
    assert asyncio.run(game_store.read_leaderboard(fake_redis)) == {
        "erin": 4,
        "user:frank": 2,
    }
