"""
Agent - Interface for player decision-making.

The engine holds one Agent per seat and asks it for decisions:
- which action card to play (or pass)
- breathe or travel, when both are possible
- whether to block an attack with a Shield
- which cards to discard when forced
- who to swap space tracks with (WormHole)
- which card to take (HackSuit)

Before every question the engine pushes a fresh VisibleState through
update_state(). Agents never see the GameState itself.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence
import random

from ..engine_core.action import Action, PLAYABLE_CARDS
from ..engine_core.cards import Card
from ..engine_core.state import BreatheOrTravel, PlayerReference

if TYPE_CHECKING:
    from ..engine_core.visibility import VisibleState


class Agent(ABC):
    """
    Abstract base class for agents.

    An agent defines how one player makes decisions. Implementations
    range from scripted replays to interactive prompts.
    """

    def __init__(self):
        self.state: VisibleState | None = None

    def update_state(self, state: VisibleState) -> None:
        """Receive the latest view of the game."""
        self.state = state

    @abstractmethod
    def play_action(self) -> Action | None:
        """Return an action to play, or None to move on to breathing."""

    @abstractmethod
    def breathe_or_travel(self) -> BreatheOrTravel:
        """Only asked when the player holds both an O1 and an O2."""

    @abstractmethod
    def defend(self, action: Action) -> bool:
        """Only asked when the player holds a Shield and is not in a solar flare."""

    @abstractmethod
    def forced_discard(self, count: int) -> Sequence[Card]:
        """Return exactly `count` cards from the player's own hand."""

    @abstractmethod
    def choose_player_to_swap_with(self) -> PlayerReference:
        """Pick another living player to swap space tracks with."""

    @abstractmethod
    def choose_card_to_take(self, kinds: Sequence[Card]) -> Card:
        """Pick one of the card kinds held by the HackSuit target."""

    def get_name(self) -> str:
        """Get the agent's name/identifier."""
        return self.__class__.__name__

    def _opponents(self) -> list[PlayerReference]:
        return self.state.opponents() if self.state else []

    def _hand(self) -> list[Card]:
        return list(self.state.hand) if self.state else []


class FirstEligibleAgent(Agent):
    """
    First-eligible agent - always takes the first option on offer.

    Used for:
    - Deterministic testing
    - Baseline comparison

    Never plays action cards, always defends, and prefers breathing.
    """

    def play_action(self) -> Action | None:
        return None

    def breathe_or_travel(self) -> BreatheOrTravel:
        return BreatheOrTravel.BREATHE

    def defend(self, action: Action) -> bool:
        return True

    def forced_discard(self, count: int) -> Sequence[Card]:
        return self._hand()[:count]

    def choose_player_to_swap_with(self) -> PlayerReference:
        opponents = self._opponents()
        if not opponents:
            raise ValueError("No players to swap with")
        return opponents[0]

    def choose_card_to_take(self, kinds: Sequence[Card]) -> Card:
        if not kinds:
            raise ValueError("No cards to take")
        return kinds[0]


class RandomAgent(Agent):
    """
    Random agent - picks uniformly among plausible moves.

    Used for:
    - Simulation and fuzzing
    - Baseline comparison

    Uses its own RNG so agent randomness never shifts the game's RNG stream.
    """

    def __init__(
        self,
        seed: int | None = None,
        pass_probability: float = 0.5,
        defend_probability: float = 0.75,
    ):
        super().__init__()
        self.rng = random.Random(seed)
        self.pass_probability = pass_probability
        self.defend_probability = defend_probability

    def play_action(self) -> Action | None:
        if self.state is None or self.state.in_solar_flare:
            return None
        if self.rng.random() < self.pass_probability:
            return None

        candidates = []
        opponents = self._opponents()
        for card in sorted(set(self.state.hand), key=list(Card).index):
            if card not in PLAYABLE_CARDS:
                continue
            if not PLAYABLE_CARDS[card]:
                candidates.append(Action(card=card))
                continue

            steal = Action(card=card).stealing or 0
            for target in opponents:
                if self.state.players[target.index].hand_size >= steal:
                    candidates.append(Action(card=card, target=target))

        if not candidates:
            return None
        return self.rng.choice(candidates)

    def breathe_or_travel(self) -> BreatheOrTravel:
        return self.rng.choice([BreatheOrTravel.BREATHE, BreatheOrTravel.TRAVEL])

    def defend(self, action: Action) -> bool:
        return self.rng.random() < self.defend_probability

    def forced_discard(self, count: int) -> Sequence[Card]:
        hand = self._hand()
        return self.rng.sample(hand, min(count, len(hand)))

    def choose_player_to_swap_with(self) -> PlayerReference:
        opponents = self._opponents()
        if not opponents:
            raise ValueError("No players to swap with")
        return self.rng.choice(opponents)

    def choose_card_to_take(self, kinds: Sequence[Card]) -> Card:
        if not kinds:
            raise ValueError("No cards to take")
        return self.rng.choice(list(kinds))
