import random

import pytest

from drawpoker.cards import SUITS, VALUES, Card, Deck, InsufficientCardsError, parse_label


def test_deck_is_built_suit_major_value_minor():
    deck = Deck()
    assert len(deck) == 52
    assert deck.cards[0] == Card("♠", "2")
    assert deck.cards[12] == Card("♠", "A")
    assert deck.cards[13] == Card("♥", "2")
    assert deck.cards[-1] == Card("♦", "A")
    assert len(set(deck.cards)) == 52
    assert {(card.suit, card.value) for card in deck.cards} == {(s, v) for s in SUITS for v in VALUES}


def test_shuffle_is_a_permutation_of_the_full_deck():
    deck = Deck()
    deck.shuffle(random.Random(5))
    assert len(deck) == 52
    assert sorted(deck.cards, key=lambda c: (c.suit, c.value)) == sorted(
        Deck().cards, key=lambda c: (c.suit, c.value)
    )
    assert deck.cards != Deck().cards


def test_shuffle_is_reproducible_with_injected_generator():
    first, second = Deck(), Deck()
    first.shuffle(random.Random(1234))
    second.shuffle(random.Random(1234))
    assert first.cards == second.cards

    third = Deck()
    third.shuffle(random.Random(4321))
    assert third.cards != first.cards


def test_deal_takes_cards_from_the_front():
    deck = Deck()
    expected = deck.cards[:5]
    dealt = deck.deal(5)
    assert dealt == expected
    assert len(deck) == 47
    assert deck.remaining == 47
    assert not set(dealt) & set(deck.cards)


def test_deal_zero_is_a_no_op():
    deck = Deck()
    assert deck.deal(0) == []
    assert len(deck) == 52


def test_deal_raises_when_deck_exhausted():
    deck = Deck()
    deck.deal(50)
    with pytest.raises(InsufficientCardsError, match="Not enough cards"):
        deck.deal(3)
    assert len(deck) == 2
    assert len(deck.deal(2)) == 2


def test_deal_rejects_negative_count():
    with pytest.raises(ValueError, match="negative"):
        Deck().deal(-1)


def test_card_color_and_label():
    assert Card("♥", "A").color == "red"
    assert Card("♦", "10").color == "red"
    assert Card("♠", "K").color == "black"
    assert Card("♣", "2").color == "black"
    assert Card("♦", "10").label == "10♦"
    assert str(Card("♠", "Q")) == "Q♠"
    assert Card("♥", "J").to_payload() == {"suit": "♥", "value": "J", "color": "red", "label": "J♥"}


def test_cards_compare_by_suit_and_value():
    assert Card("♠", "A") == Card("♠", "A")
    assert Card("♠", "A") != Card("♥", "A")
    assert len({Card("♠", "A"), Card("♠", "A")}) == 1


def test_card_validation_rejects_invalid_values():
    with pytest.raises(ValueError, match="Invalid value"):
        Card("♠", "1")
    with pytest.raises(ValueError, match="Invalid suit"):
        Card("x", "A")


def test_parse_label_accepts_symbols_and_ascii_shorthand():
    assert parse_label("10♠") == Card("♠", "10")
    assert parse_label("Ts") == Card("♠", "10")
    assert parse_label("10h") == Card("♥", "10")
    assert parse_label("qd") == Card("♦", "Q")
    assert parse_label(" Ac ") == Card("♣", "A")
    with pytest.raises(ValueError, match="Invalid card label"):
        parse_label("A")
