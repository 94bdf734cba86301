"""
Card definitions for Selfish.

Two closed card families exist:
- Card: the action deck (oxygen, attacks, utilities, shields)
- SpaceCard: the space track, drawn when a player travels

Cards are plain values. Only counts matter, so there are no per-instance IDs.
"""

from __future__ import annotations
from enum import Enum


class Card(str, Enum):
    """Cards of the action deck."""
    O1 = "O1"
    O2 = "O2"
    OXYGEN_SIPHON = "OxygenSiphon"
    SHIELD = "Shield"
    HACK_SUIT = "HackSuit"
    TRACTOR_BEAM = "TractorBeam"
    ROCKET_BOOSTER = "RocketBooster"
    LASER_BLAST = "LaserBlast"
    HOLE_IN_SUIT = "HoleInSuit"
    TETHER = "Tether"

    def __str__(self) -> str:
        return self.value


class SpaceCard(str, Enum):
    """Cards of the space track."""
    BLANK_SPACE = "BlankSpace"
    USEFUL_JUNK = "UsefulJunk"
    MYSTERIOUS_NEBULA = "MysteriousNebula"
    HYPERSPACE = "Hyperspace"
    METEOROID = "Meteoroid"
    COSMIC_RADIATION = "CosmicRadiation"
    ASTEROID_FIELD = "AsteroidField"
    GRAVITATIONAL_ANOMALY = "GravitationalAnomaly"
    WORM_HOLE = "WormHole"
    SOLAR_FLARE = "SolarFlare"

    def __str__(self) -> str:
        return self.value


OXYGEN_CARDS = frozenset({Card.O1, Card.O2})

# Composition order matters: it is the pre-shuffle order, so changing it
# changes every seeded game.
ACTION_DECK_COMPOSITION: dict[Card, int] = {
    Card.O1: 38,
    Card.O2: 20,
    Card.OXYGEN_SIPHON: 3,
    Card.SHIELD: 4,
    Card.HACK_SUIT: 3,
    Card.TRACTOR_BEAM: 4,
    Card.ROCKET_BOOSTER: 4,
    Card.LASER_BLAST: 4,
    Card.HOLE_IN_SUIT: 4,
    Card.TETHER: 4,
}

SPACE_DECK_COMPOSITION: dict[SpaceCard, int] = {
    SpaceCard.BLANK_SPACE: 9,
    SpaceCard.USEFUL_JUNK: 5,
    SpaceCard.MYSTERIOUS_NEBULA: 2,
    SpaceCard.HYPERSPACE: 1,
    SpaceCard.METEOROID: 4,
    SpaceCard.COSMIC_RADIATION: 6,
    SpaceCard.ASTEROID_FIELD: 2,
    SpaceCard.GRAVITATIONAL_ANOMALY: 4,
    SpaceCard.WORM_HOLE: 4,
    SpaceCard.SOLAR_FLARE: 5,
}

# Initial deal per player
STARTING_HAND: tuple[Card, ...] = (Card.O2, Card.O1, Card.O1, Card.O1, Card.O1)

# Meteoroid only hits players holding more than this many cards
METEOROID_HAND_LIMIT = 6
METEOROID_DISCARD_COUNT = 2


def build_action_cards() -> list[Card]:
    """Unshuffled list of every action card in the game."""
    cards: list[Card] = []
    for card, count in ACTION_DECK_COMPOSITION.items():
        cards.extend([card] * count)
    return cards


def build_space_cards() -> list[SpaceCard]:
    """Unshuffled list of every space card in the game."""
    cards: list[SpaceCard] = []
    for card, count in SPACE_DECK_COMPOSITION.items():
        cards.extend([card] * count)
    return cards
