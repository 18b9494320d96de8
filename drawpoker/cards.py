from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Optional

SUITS = ("♠", "♥", "♣", "♦")
VALUES = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A")
RED_SUITS = frozenset({"♥", "♦"})

# Ordinal used for straight detection: 2=0 ... A=12.
VALUE_INDEX = {value: idx for idx, value in enumerate(VALUES)}

# ASCII shorthands accepted by parse_label ("Ts", "10h", "Ad").
SUIT_ALIASES = {"s": "♠", "h": "♥", "c": "♣", "d": "♦"}
VALUE_ALIASES = {"T": "10"}

class InsufficientCardsError(ValueError):
    """Raised when a deal asks for more cards than the deck still holds."""

@dataclass(frozen=True)
class Card:
    suit: str
    value: str

    def __post_init__(self) -> None:
        if self.suit not in SUITS:
            raise ValueError(f"Invalid suit: {self.suit}")
        if self.value not in VALUES:
            raise ValueError(f"Invalid value: {self.value}")

    @property
    def color(self) -> str:
        return "red" if self.suit in RED_SUITS else "black"

    @property
    def label(self) -> str:
        return f"{self.value}{self.suit}"

    def __str__(self) -> str:
        return self.label

    def to_payload(self) -> Dict[str, str]:
        return {"suit": self.suit, "value": self.value, "color": self.color, "label": self.label}

class Deck:
    """52 unique cards dealt from the front; never refilled."""

    def __init__(self) -> None:
        self.cards: List[Card] = [Card(suit, value) for suit in SUITS for value in VALUES]

    def __len__(self) -> int:
        return len(self.cards)

    @property
    def remaining(self) -> int:
        return len(self.cards)

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        # random.Random.shuffle walks from the last index down, swapping with
        # a uniform pick at or below it.
        (rng or random.Random()).shuffle(self.cards)

    def deal(self, count: int) -> List[Card]:
        if count < 0:
            raise ValueError(f"Cannot deal a negative number of cards: {count}")
        if len(self.cards) < count:
            raise InsufficientCardsError(
                f"Not enough cards left in deck: requested {count}, {len(self.cards)} remaining"
            )
        cards = self.cards[:count]
        del self.cards[:count]
        return cards

def parse_label(label: str) -> Card:
    text = label.strip()
    if len(text) < 2:
        raise ValueError(f"Invalid card label: {label}")
    value, suit = text[:-1], text[-1]
    suit = SUIT_ALIASES.get(suit.lower(), suit)
    value = VALUE_ALIASES.get(value.upper(), value.upper())
    return Card(suit, value)
