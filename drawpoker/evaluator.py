from __future__ import annotations

from enum import IntEnum
from typing import Dict, List, Sequence

from .cards import VALUE_INDEX, Card, parse_label
from .models import Outcome

HAND_SIZE = 5


class HandRank(IntEnum):
    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9


def evaluate_hand(cards: Sequence[Card]) -> HandRank:
    """Rank exactly five cards. Higher is better; kickers are never consulted."""
    if len(cards) != HAND_SIZE:
        raise ValueError(f"Hand must contain exactly {HAND_SIZE} cards, got {len(cards)}")

    counts: Dict[str, int] = {}
    for card in cards:
        counts.setdefault(card.value, 0)
        counts[card.value] += 1

    is_flush = len({card.suit for card in cards}) == 1
    is_straight = _is_straight(counts)
    count_values = sorted(counts.values(), reverse=True)

    if is_straight and is_flush:
        return HandRank.STRAIGHT_FLUSH
    if count_values[0] == 4:
        return HandRank.FOUR_OF_A_KIND
    if count_values[0] == 3 and count_values[1] == 2:
        return HandRank.FULL_HOUSE
    if is_flush:
        return HandRank.FLUSH
    if is_straight:
        return HandRank.STRAIGHT
    if count_values[0] == 3:
        return HandRank.THREE_OF_A_KIND
    if count_values[0] == 2 and count_values[1] == 2:
        return HandRank.TWO_PAIR
    if count_values[0] == 2:
        return HandRank.ONE_PAIR
    return HandRank.HIGH_CARD


def _is_straight(counts: Dict[str, int]) -> bool:
    # Aces only play high, so A-2-3-4-5 spans 12 and is not a straight.
    if len(counts) != HAND_SIZE:
        return False
    indices = sorted(VALUE_INDEX[value] for value in counts)
    return indices[-1] - indices[0] == HAND_SIZE - 1


def describe_rank(rank: HandRank) -> str:
    return HandRank(rank).name.lower()


def compare_hands(player: Sequence[Card], computer: Sequence[Card]) -> Outcome:
    return decide_outcome(evaluate_hand(player), evaluate_hand(computer))


def decide_outcome(player_rank: int, computer_rank: int) -> Outcome:
    # Equal categories tie; there is no kicker comparison.
    if player_rank > computer_rank:
        return Outcome.PLAYER
    if computer_rank > player_rank:
        return Outcome.COMPUTER
    return Outcome.TIE


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]
