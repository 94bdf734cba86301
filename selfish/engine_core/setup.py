"""
Game Setup - Creates the initial game state.

This module handles:
- Seeding the RNG (a fresh 64-bit seed is drawn when none is given)
- Shuffling the space deck, then the action deck
- Initial deal: one O2 and four O1 per player

RNG call order is fixed; the same seed always yields the same decks.
"""

from __future__ import annotations
import random

from .cards import STARTING_HAND
from .deck import ActionDeck, SpaceDeck
from .state import GameState, Phase, PlayerReference, PlayerState

MIN_PLAYERS = 2
MAX_PLAYERS = 6


def new_game(num_players: int, seed: int | None = None) -> GameState:
    """
    Set up a new game.

    Args:
        num_players: Number of players (2-6)
        seed: Seed for deterministic shuffling (random if None)

    Returns:
        Initial GameState, first player in the pickup phase
    """
    if num_players < MIN_PLAYERS or num_players > MAX_PLAYERS:
        raise ValueError(f"Selfish supports {MIN_PLAYERS}-{MAX_PLAYERS} players")

    if seed is None:
        seed = random.SystemRandom().getrandbits(64)
    rng = random.Random(seed)

    space_deck = SpaceDeck.shuffled(rng)
    action_deck = ActionDeck.shuffled(rng)

    players = []
    for _ in range(num_players):
        player = PlayerState()
        for card in STARTING_HAND:
            player.give(action_deck.take(card))
        players.append(player)

    game = GameState(
        seed=seed,
        rng=rng,
        action_deck=action_deck,
        space_deck=space_deck,
        players=players,
        whose_turn=PlayerReference(0),
        phase=Phase.PICKUP,
    )
    game.record("game_started", seed=seed, players=num_players)
    return game
