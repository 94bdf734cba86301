"""
Pytest fixtures for Selfish tests.
"""

import pytest

from ..agents import ScriptedAgent
from ..engine_core.cards import Card, SpaceCard
from ..engine_core.reducer import ActionResolver
from ..engine_core.setup import new_game
from ..engine_core.state import GameState, Phase, PlayerReference
from ..utils.logging import configure_logging

P0 = PlayerReference(0)
P1 = PlayerReference(1)
P2 = PlayerReference(2)


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Keep per-event debug logs out of test output."""
    configure_logging(level="WARNING", json_format=False)


def set_hand(game: GameState, ref: PlayerReference, cards: list[Card]) -> None:
    """Replace a player's hand, keeping every card accounted for."""
    player = game.player(ref)
    for card in player.hand:
        game.action_deck.add_to_discard(card)
    player.hand.clear()
    for card in cards:
        if card in game.action_deck.available:
            game.action_deck.available.remove(card)
        else:
            game.action_deck.discard.remove(card)
        player.hand.append(card)


def put_on_top(game: GameState, card: Card) -> None:
    """Move one copy of `card` to the top of the available pile."""
    if card in game.action_deck.available:
        game.action_deck.available.remove(card)
    else:
        game.action_deck.discard.remove(card)
    game.action_deck.available.append(card)


def stack_space_deck(game: GameState, *cards: SpaceCard) -> None:
    """Put the given space cards at the front of the space deck, in order."""
    for card in reversed(cards):
        game.space_deck.cards.remove(card)
        game.space_deck.cards.insert(0, card)


def snapshot(game: GameState) -> tuple:
    """Everything a rejected action must leave untouched."""
    return (
        [list(p.hand) for p in game.players],
        [list(p.space) for p in game.players],
        [p.alive for p in game.players],
        list(game.action_deck.available),
        list(game.action_deck.discard),
        list(game.space_deck.cards),
        game.rng.getstate(),
        game.whose_turn,
        game.phase,
    )


@pytest.fixture
def two_player_game() -> GameState:
    """A seeded 2-player game, first player in the Actions phase."""
    game = new_game(2, seed=7)
    game.phase = Phase.ACTIONS
    return game


@pytest.fixture
def three_player_game() -> GameState:
    """A seeded 3-player game, first player in the Actions phase."""
    game = new_game(3, seed=11)
    game.phase = Phase.ACTIONS
    return game


@pytest.fixture
def agents() -> list[ScriptedAgent]:
    return [ScriptedAgent() for _ in range(3)]


@pytest.fixture
def resolver(agents) -> ActionResolver:
    return ActionResolver(agents=agents)
