from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Set

from .bots import DiscardPolicy, random_discards, validate_discards
from .cards import Card, Deck
from .evaluator import HAND_SIZE, decide_outcome, describe_rank, evaluate_hand
from .models import (
    ALLOWED_ACTIONS,
    GameConfig,
    InvalidPhaseAction,
    Phase,
    RoundSnapshot,
    ShowdownResult,
)

LOGGER = logging.getLogger("drawpoker")

# GameEngine owns one deal-draw-showdown round at a time. It knows nothing
# about rendering or sockets; callers read snapshots and render them.


@dataclass
class RoundContext:
    # Everything that lives for exactly one round.
    round_id: str
    deck: Deck
    player_hand: List[Card] = field(default_factory=list)
    computer_hand: List[Card] = field(default_factory=list)
    selection: Set[int] = field(default_factory=set)
    player_discards: List[int] = field(default_factory=list)
    computer_discards: List[int] = field(default_factory=list)
    result: Optional[ShowdownResult] = None


class GameEngine:
    """Five-card draw, human player against the house."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        discard_policy: Optional[DiscardPolicy] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.discard_policy = discard_policy or random_discards
        self.phase = Phase.IDLE
        self.round: Optional[RoundContext] = None
        self.round_counter = 0

    # Round lifecycle -------------------------------------------------

    def deal(self) -> RoundContext:
        self._require_phase("deal", Phase.IDLE, Phase.SHOWN_DOWN)

        deck = Deck()
        deck.shuffle(self.rng)
        ctx = RoundContext(round_id=f"R-{self.round_counter:05d}", deck=deck)
        self.round_counter += 1

        ctx.player_hand = deck.deal(HAND_SIZE)
        ctx.computer_hand = deck.deal(HAND_SIZE)
        self.round = ctx
        self.phase = Phase.DEALT
        LOGGER.debug("Round %s dealt, %d cards left", ctx.round_id, len(deck))
        return ctx

    def toggle_select(self, index: int) -> bool:
        """Flip a discard mark on the player's hand; returns the new state.

        Outside the DEALT phase this does nothing and returns False. A fourth
        mark is ignored rather than rejected.
        """
        if self.phase != Phase.DEALT or self.round is None:
            return False
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < HAND_SIZE:
            raise ValueError(f"Selection index out of range: {index!r}")

        selection = self.round.selection
        if index in selection:
            selection.discard(index)
            return False
        if len(selection) < self.config.max_discards:
            selection.add(index)
            return True
        return False

    def draw(self) -> RoundContext:
        self._require_phase("draw", Phase.DEALT)
        ctx = self.round
        assert ctx is not None

        # The house picks before any card moves; a rejected pick leaves the
        # round untouched. Player replaces first, then the house, same deck.
        picked = validate_discards(self.discard_policy(tuple(ctx.computer_hand), self.rng), HAND_SIZE)

        ctx.player_discards = sorted(ctx.selection, reverse=True)
        self._replace(ctx.deck, ctx.player_hand, ctx.player_discards)

        ctx.computer_discards = sorted(picked, reverse=True)
        self._replace(ctx.deck, ctx.computer_hand, ctx.computer_discards)

        ctx.selection.clear()
        self.phase = Phase.DRAWN
        LOGGER.debug(
            "Round %s drawn: player replaced %d, computer replaced %d",
            ctx.round_id,
            len(ctx.player_discards),
            len(ctx.computer_discards),
        )
        return ctx

    def showdown(self) -> ShowdownResult:
        self._require_phase("showdown", Phase.DRAWN)
        ctx = self.round
        assert ctx is not None

        player_rank = evaluate_hand(ctx.player_hand)
        computer_rank = evaluate_hand(ctx.computer_hand)
        outcome = decide_outcome(player_rank, computer_rank)

        ctx.result = ShowdownResult(
            player_rank=int(player_rank),
            computer_rank=int(computer_rank),
            player_rank_name=describe_rank(player_rank),
            computer_rank_name=describe_rank(computer_rank),
            outcome=outcome,
        )
        self.phase = Phase.SHOWN_DOWN
        LOGGER.debug(
            "Round %s showdown: %s vs %s -> %s",
            ctx.round_id,
            ctx.result.player_rank_name,
            ctx.result.computer_rank_name,
            outcome.value,
        )
        return ctx.result

    def reset(self) -> None:
        self.round = None
        self.phase = Phase.IDLE

    def _require_phase(self, action: str, *allowed: Phase) -> None:
        if self.phase not in allowed:
            raise InvalidPhaseAction(action, self.phase)

    @staticmethod
    def _replace(deck: Deck, hand: List[Card], positions: List[int]) -> None:
        # One flat deal; positions arrive in descending order and take the
        # fresh cards in deal order.
        fresh = deck.deal(len(positions))
        for position, card in zip(positions, fresh):
            hand[position] = card

    # Snapshot helpers ------------------------------------------------

    def cards_in_play(self) -> int:
        if self.round is None:
            return 0
        ctx = self.round
        return len(ctx.deck) + len(ctx.player_hand) + len(ctx.computer_hand)

    def snapshot(self) -> RoundSnapshot:
        allowed = ALLOWED_ACTIONS[self.phase]
        ctx = self.round
        if ctx is None:
            return RoundSnapshot(phase=self.phase, round_id=None, allowed=allowed)
        return RoundSnapshot(
            phase=self.phase,
            round_id=ctx.round_id,
            player_hand=tuple(ctx.player_hand),
            computer_hand=tuple(ctx.computer_hand),
            selection=tuple(sorted(ctx.selection)),
            deck_remaining=len(ctx.deck),
            computer_discards=len(ctx.computer_discards),
            result=ctx.result,
            allowed=allowed,
        )

    def snapshot_payload(self) -> dict:
        return self.snapshot().to_payload()
