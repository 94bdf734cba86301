"""
Decks - the action deck (with discard and reshuffle) and the space track deck.

Both decks take the game's RNG as an argument instead of holding it, so
the game stays the single owner of randomness and the call order of
shuffles and draws is fixed by the engine.
"""

from __future__ import annotations
import random
from collections import Counter
from dataclasses import dataclass, field

from .cards import Card, SpaceCard, build_action_cards, build_space_cards
from .errors import EngineContractError


@dataclass
class ActionDeck:
    """
    The action card deck.

    Cards are drawn from the end of `available`. When it runs dry the
    discard pile is shuffled back in.
    """
    available: list[Card] = field(default_factory=list)
    discard: list[Card] = field(default_factory=list)

    @classmethod
    def shuffled(cls, rng: random.Random) -> ActionDeck:
        """Build the full deck and shuffle it."""
        deck = cls(available=build_action_cards())
        rng.shuffle(deck.available)
        return deck

    @property
    def size(self) -> int:
        return len(self.available) + len(self.discard)

    def take(self, card: Card) -> Card:
        """
        Remove one specific card from the available pile.

        Only used for the initial deal.
        """
        try:
            self.available.remove(card)
        except ValueError:
            raise EngineContractError(f"Deck has no {card} left to deal") from None
        return card

    def draw(self, rng: random.Random) -> Card:
        """Draw the top card, reshuffling the discard pile first if needed."""
        if not self.available:
            self.available.extend(self.discard)
            self.discard.clear()
            rng.shuffle(self.available)
        if not self.available:
            raise EngineContractError("Both action piles are empty")
        return self.available.pop()

    def add_to_discard(self, card: Card) -> None:
        self.discard.append(card)

    def counts(self) -> Counter[Card]:
        """Card counts across both piles."""
        return Counter(self.available) + Counter(self.discard)


@dataclass
class SpaceDeck:
    """
    The space track deck.

    Drawn from the front and never refilled: space cards that leave a
    player's track (anomalies, laser blasts) are out of the game.
    """
    cards: list[SpaceCard] = field(default_factory=list)

    @classmethod
    def shuffled(cls, rng: random.Random) -> SpaceDeck:
        deck = cls(cards=build_space_cards())
        rng.shuffle(deck.cards)
        return deck

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    @property
    def remaining(self) -> int:
        return len(self.cards)

    def draw(self) -> SpaceCard:
        if not self.cards:
            raise EngineContractError("Space deck is exhausted")
        return self.cards.pop(0)
