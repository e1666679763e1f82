"""Deck and card rules that are independent from HTTP and Redis.

Rule of thumb:
- OK: building the deck, shuffling with a given random source, card messages.
- Not OK: touching Redis, FastAPI, seeding random generators.
"""

import random
from enum import Enum
from typing import List, Tuple


class Card(str, Enum):
    KITTEN = "KITTEN"
    DIFFUSE = "DIFFUSE"
    SHUFFLE = "SHUFFLE"
    EXPLODE = "EXPLODE"
    UNKNOWN = "UNKNOWN"  # never dealt, reported for labels outside the deck


# Two kittens, one defuse, one shuffle and one bomb.
DEFAULT_DECK = (
    Card.KITTEN,
    Card.DIFFUSE,
    Card.SHUFFLE,
    Card.KITTEN,
    Card.EXPLODE,
)

CARD_MESSAGES = {
    Card.KITTEN: "You drew a cat card 😼",
    Card.EXPLODE: "Game over! You drew an exploding kitten 💣",
    Card.DIFFUSE: "You drew a defuse card 🙅‍♂️",
    Card.SHUFFLE: "You drew a shuffle card 🔀",
}
UNKNOWN_CARD_MESSAGE = "Unknown card"


def new_deck() -> List[str]:
    """Return a fresh, unshuffled copy of the default deck as plain labels."""
    return [card.value for card in DEFAULT_DECK]


def shuffle_deck(cards: List[str], rng: random.Random) -> List[str]:
    """Shuffle ``cards`` in place with Fisher-Yates.

    Args:
        cards (List[str]): Card labels, mutated in place
        rng (random.Random): Random source owned by the caller

    Returns:
        List[str]: The same list, for chaining
    """
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randrange(i + 1)
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def describe_card(label: str) -> Tuple[str, str]:
    """Map a drawn label to ``(message, card)``.

    Labels outside the deck are reported as UNKNOWN instead of failing.
    """
    try:
        card = Card(label)
    except ValueError:
        return UNKNOWN_CARD_MESSAGE, Card.UNKNOWN.value
    if card not in CARD_MESSAGES:
        return UNKNOWN_CARD_MESSAGE, Card.UNKNOWN.value
    return CARD_MESSAGES[card], card.value
