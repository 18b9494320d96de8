"""Five-card draw engine: cards, hand ranking and the round controller."""

from .bots import POLICIES, keep_pairs_discards, random_discards
from .cards import SUITS, VALUES, Card, Deck, InsufficientCardsError
from .evaluator import HandRank, compare_hands, describe_rank, evaluate_hand, parse_cards
from .game import GameEngine, RoundContext
from .models import GameConfig, InvalidPhaseAction, Outcome, Phase, RoundSnapshot, ShowdownResult

__all__ = [
    "Card",
    "Deck",
    "SUITS",
    "VALUES",
    "InsufficientCardsError",
    "HandRank",
    "compare_hands",
    "describe_rank",
    "evaluate_hand",
    "parse_cards",
    "GameEngine",
    "RoundContext",
    "GameConfig",
    "InvalidPhaseAction",
    "Outcome",
    "Phase",
    "RoundSnapshot",
    "ShowdownResult",
    "POLICIES",
    "keep_pairs_discards",
    "random_discards",
]
