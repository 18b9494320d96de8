from __future__ import annotations

import random
from typing import List, Optional, Sequence

from drawpoker.bots import DiscardPolicy
from drawpoker.cards import Card
from drawpoker.game import GameEngine
from drawpoker.models import GameConfig


def create_engine(
    *,
    seed: int = 42,
    max_discards: int = 3,
    discard_policy: Optional[DiscardPolicy] = None,
) -> GameEngine:
    """Engine with a seeded dealer so every run deals the same cards."""
    return GameEngine(
        GameConfig(max_discards=max_discards, seed=seed),
        rng=random.Random(seed),
        discard_policy=discard_policy,
    )


def fixed_discards(*positions: int) -> DiscardPolicy:
    """House policy that always throws the same positions."""

    def policy(hand: Sequence[Card], rng: random.Random) -> List[int]:
        return list(positions)

    return policy


def all_cards(engine: GameEngine) -> List[Card]:
    ctx = engine.round
    assert ctx is not None
    return list(ctx.deck.cards) + list(ctx.player_hand) + list(ctx.computer_hand)


def deal_and_draw(engine: GameEngine, selection: Sequence[int] = ()) -> None:
    engine.deal()
    for index in selection:
        engine.toggle_select(index)
    engine.draw()
