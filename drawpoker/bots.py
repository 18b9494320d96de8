from __future__ import annotations

import random
from typing import Callable, Dict, List, Sequence

from .cards import VALUE_INDEX, Card

DiscardPolicy = Callable[[Sequence[Card], random.Random], List[int]]

MIN_COMPUTER_DISCARDS = 1
MAX_COMPUTER_DISCARDS = 3


def random_discards(hand: Sequence[Card], rng: random.Random) -> List[int]:
    """Placeholder opponent: throws away 1-3 positions chosen at random."""
    count = rng.randint(MIN_COMPUTER_DISCARDS, MAX_COMPUTER_DISCARDS)
    indices: List[int] = []
    while len(indices) < count:
        index = rng.randrange(len(hand))
        if index not in indices:
            indices.append(index)
    return indices


def keep_pairs_discards(hand: Sequence[Card], rng: random.Random) -> List[int]:
    """Keep every card whose value repeats; dump the lowest singletons.

    Always discards at least one card, so a made hand (full house, quads)
    gives up its lowest card rather than standing pat.
    """
    counts: Dict[str, int] = {}
    for card in hand:
        counts.setdefault(card.value, 0)
        counts[card.value] += 1

    singles = [idx for idx, card in enumerate(hand) if counts[card.value] == 1]
    singles.sort(key=lambda idx: VALUE_INDEX[hand[idx].value])
    discards = singles[:MAX_COMPUTER_DISCARDS]
    if not discards:
        lowest = min(range(len(hand)), key=lambda idx: VALUE_INDEX[hand[idx].value])
        discards = [lowest]
    return discards


POLICIES: Dict[str, DiscardPolicy] = {
    "random": random_discards,
    "pairs": keep_pairs_discards,
}


def validate_discards(indices: Sequence[int], hand_size: int) -> List[int]:
    picked = list(indices)
    if not MIN_COMPUTER_DISCARDS <= len(picked) <= MAX_COMPUTER_DISCARDS:
        raise ValueError(f"Computer must discard between 1 and 3 cards, got {len(picked)}")
    if len(set(picked)) != len(picked):
        raise ValueError(f"Duplicate discard positions: {picked}")
    for index in picked:
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < hand_size:
            raise ValueError(f"Discard position out of range: {index}")
    return picked
