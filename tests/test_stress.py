import random

from drawpoker.bots import keep_pairs_discards
from drawpoker.evaluator import evaluate_hand
from drawpoker.models import Outcome

from .helpers import all_cards, create_engine


def test_engine_handles_thousand_rounds_without_losing_cards():
    engine = create_engine(seed=2024)
    picker = random.Random(99)
    outcomes = {outcome: 0 for outcome in Outcome}

    for _ in range(1_000):
        engine.deal()
        assert engine.cards_in_play() == 52

        for index in picker.sample(range(5), picker.randint(0, 4)):
            engine.toggle_select(index)
        selected = len(engine.round.selection)
        assert selected <= 3

        engine.draw()
        ctx = engine.round
        discarded = selected + len(ctx.computer_discards)
        assert engine.cards_in_play() == 52 - discarded
        assert len(set(all_cards(engine))) == engine.cards_in_play()

        result = engine.showdown()
        assert result.player_rank == evaluate_hand(ctx.player_hand)
        assert result.computer_rank == evaluate_hand(ctx.computer_hand)
        outcomes[result.outcome] += 1

    assert sum(outcomes.values()) == 1_000
    assert outcomes[Outcome.PLAYER] and outcomes[Outcome.COMPUTER] and outcomes[Outcome.TIE]


def test_pairs_policy_plays_many_rounds():
    engine = create_engine(seed=5, discard_policy=keep_pairs_discards)
    for _ in range(300):
        engine.deal()
        engine.draw()
        assert 1 <= len(engine.round.computer_discards) <= 3
        engine.showdown()
