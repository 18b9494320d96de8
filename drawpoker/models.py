from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .cards import Card


class Phase(str, Enum):
    IDLE = "IDLE"
    DEALT = "DEALT"
    DRAWN = "DRAWN"
    SHOWN_DOWN = "SHOWN_DOWN"


class Outcome(str, Enum):
    PLAYER = "PLAYER"
    COMPUTER = "COMPUTER"
    TIE = "TIE"

    @property
    def message(self) -> str:
        return OUTCOME_MESSAGES[self]


OUTCOME_MESSAGES = {
    Outcome.PLAYER: "You win!",
    Outcome.COMPUTER: "Computer wins!",
    Outcome.TIE: "It's a tie!",
}

PHASE_MESSAGES = {
    Phase.IDLE: "Deal to start a new round",
    Phase.DEALT: "Select up to 3 cards to discard",
    Phase.DRAWN: "Show cards to reveal hands",
}

# Actions a renderer may enable in each phase.
ALLOWED_ACTIONS: Dict[Phase, Tuple[str, ...]] = {
    Phase.IDLE: ("deal",),
    Phase.DEALT: ("toggle", "draw", "reset"),
    Phase.DRAWN: ("showdown", "reset"),
    Phase.SHOWN_DOWN: ("deal", "reset"),
}


class InvalidPhaseAction(RuntimeError):
    """An action was requested in a phase that does not permit it."""

    def __init__(self, action: str, phase: Phase) -> None:
        super().__init__(f"Cannot {action} during {phase.value}")
        self.action = action
        self.phase = phase


@dataclass
class GameConfig:
    max_discards: int = 3
    seed: Optional[int] = None


@dataclass(frozen=True)
class ShowdownResult:
    player_rank: int
    computer_rank: int
    player_rank_name: str
    computer_rank_name: str
    outcome: Outcome

    @property
    def message(self) -> str:
        return self.outcome.message


@dataclass(frozen=True)
class RoundSnapshot:
    phase: Phase
    round_id: Optional[str]
    player_hand: Tuple[Card, ...] = ()
    computer_hand: Tuple[Card, ...] = ()
    selection: Tuple[int, ...] = ()
    deck_remaining: int = 0
    computer_discards: int = 0
    result: Optional[ShowdownResult] = None
    allowed: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def computer_revealed(self) -> bool:
        return self.phase == Phase.SHOWN_DOWN

    @property
    def message(self) -> str:
        if self.result is not None:
            return self.result.message
        return PHASE_MESSAGES[self.phase]

    def to_payload(self, reveal_computer: Optional[bool] = None) -> Dict[str, object]:
        reveal = self.computer_revealed if reveal_computer is None else reveal_computer
        computer: List[Optional[Dict[str, str]]]
        if reveal:
            computer = [card.to_payload() for card in self.computer_hand]
        else:
            computer = [None for _ in self.computer_hand]

        payload: Dict[str, object] = {
            "phase": self.phase.value,
            "round_id": self.round_id,
            "player_hand": [card.to_payload() for card in self.player_hand],
            "computer_hand": computer,
            "selection": list(self.selection),
            "deck_remaining": self.deck_remaining,
            "computer_discards": self.computer_discards,
            "allowed": list(self.allowed),
            "message": self.message,
        }
        if self.result is not None:
            payload["result"] = {
                "outcome": self.result.outcome.value,
                "player_rank": self.result.player_rank,
                "computer_rank": self.result.computer_rank,
                "player_rank_name": self.result.player_rank_name,
                "computer_rank_name": self.result.computer_rank_name,
            }
        return payload
