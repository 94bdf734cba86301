"""
Invariant checks used by tests and by the game loop in debug runs.

Card conservation: every action card of the fixed composition is always
somewhere - in a hand (dead players included) or in one of the two piles.
"""

from __future__ import annotations
from collections import Counter

from .cards import ACTION_DECK_COMPOSITION, Card
from .errors import EngineContractError
from .state import GameState


def card_totals(game: GameState) -> Counter[Card]:
    """Count every action card across all hands and both piles."""
    totals = game.action_deck.counts()
    for player in game.players:
        totals.update(player.hand)
    return totals


def check_conservation(game: GameState) -> None:
    """Raise EngineContractError if cards were created or destroyed."""
    totals = card_totals(game)
    expected = Counter(ACTION_DECK_COMPOSITION)
    if totals != expected:
        drift = {
            card.value: totals[card] - expected[card]
            for card in Card
            if totals[card] != expected[card]
        }
        raise EngineContractError(f"Card conservation broken: {drift}")


def check_turn_holder(game: GameState) -> None:
    """While the game runs, the turn always belongs to a living player."""
    if not game.game_over and not game.current_player.alive:
        raise EngineContractError(f"Turn held by dead player {game.whose_turn}")
