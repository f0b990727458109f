"""Unit tests for cards, players and the card generator."""

import pytest

from unoflip.engine import Card, CardGenerator, Color, DarkColor, DarkValue, LightValue, Player, Side


def test_non_wild_faces_need_colors() -> None:
    with pytest.raises(ValueError):
        Card(None, LightValue.THREE, DarkColor.ORANGE, DarkValue.THREE)
    with pytest.raises(ValueError):
        Card(Color.RED, LightValue.THREE, None, DarkValue.THREE)


def test_wild_faces_start_without_color() -> None:
    card = Card(None, LightValue.WILD, None, DarkValue.WILD_STACK)
    assert card.color is None
    assert card.dark_color is None
    assert str(card) == "wild/wild_stack"


def test_choose_colors() -> None:
    card = Card(None, LightValue.WILD_DRAW_TWO, None, DarkValue.WILD_STACK)
    card.set_color(Color.BLUE)
    card.set_dark_color(DarkColor.TEAL)
    assert card.face(Side.LIGHT) == (LightValue.WILD_DRAW_TWO, Color.BLUE)
    assert card.face(Side.DARK) == (DarkValue.WILD_STACK, DarkColor.TEAL)
    assert str(card) == "blue_wild_draw_two/teal_wild_stack"


def test_choose_color_rejects_none_and_wrong_side() -> None:
    card = Card(None, LightValue.WILD, DarkColor.PINK, DarkValue.ONE)
    with pytest.raises(ValueError):
        card.set_color(None)
    with pytest.raises(ValueError):
        card.set_color(DarkColor.PINK)
    assert card.color is None


def test_equality_compares_all_faces() -> None:
    a = Card(Color.RED, LightValue.THREE, DarkColor.ORANGE, DarkValue.THREE)
    b = Card(Color.RED, LightValue.THREE, DarkColor.ORANGE, DarkValue.THREE)
    c = Card(Color.RED, LightValue.THREE, DarkColor.PINK, DarkValue.THREE)
    assert a == b
    assert a != c


def test_player_add_card_ignores_none() -> None:
    player = Player("A")
    player.add_card(None)
    player.add_card(Card(Color.RED, LightValue.ONE, DarkColor.TEAL, DarkValue.TWO))
    assert len(player.hand) == 1
    assert not player.is_ai


def test_generator_reproducible() -> None:
    g1 = CardGenerator(seed=123)
    g2 = CardGenerator(seed=123)
    assert [str(c) for c in g1.draw_many(50)] == [str(c) for c in g2.draw_many(50)]


def test_generator_faces() -> None:
    cards = CardGenerator(seed=7).draw_many(2000)
    for card in cards:
        if card.value in (LightValue.WILD, LightValue.WILD_DRAW_TWO):
            assert card.color is None
        else:
            assert card.color is not None
        if card.dark_value is DarkValue.WILD_STACK:
            assert card.dark_color is None
        else:
            assert card.dark_color is not None
    assert {c.value for c in cards} == set(LightValue)
    assert {c.dark_value for c in cards} == set(DarkValue)
    assert {c.color for c in cards} - {None} == set(Color)
    assert {c.dark_color for c in cards} - {None} == set(DarkColor)
