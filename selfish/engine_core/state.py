"""
Game State - The mutable state of one game of Selfish.

Design principles:
- Single owner: a GameState owns its RNG, both decks and every player
- Deterministic: all randomness flows through `rng`, in engine call order
- Traceable: every state change is recorded in `history`
"""

from __future__ import annotations
import random
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

from .cards import Card, SpaceCard
from .deck import ActionDeck, SpaceDeck
from .errors import EngineContractError, PlayerDoesNotExist, PlayerDoesNotHaveThisCard, PlayerHasNoCardsLeft
from ..utils.logging import get_logger

logger = get_logger(__name__)


class Phase(Enum):
    """Phases of a single player turn, always in this order."""
    PICKUP = "pickup"
    ACTIONS = "actions"
    BREATHE_OR_TRAVEL = "breathe_or_travel"


class BreatheOrTravel(Enum):
    """End-of-turn choice when a player holds both O1 and O2."""
    BREATHE = "breathe"
    TRAVEL = "travel"


@dataclass(frozen=True)
class PlayerReference:
    """Seat index of a player. Stable for the whole game."""
    index: int

    def __str__(self) -> str:
        return str(self.index)


@dataclass
class PlayerState:
    """
    State for a single player.

    Once `alive` is False the hand and space track are never touched again.
    """
    alive: bool = True
    hand: list[Card] = field(default_factory=list)
    # Appended as the player travels; the last entry is where they are now
    space: list[SpaceCard] = field(default_factory=list)

    @property
    def distance(self) -> int:
        return len(self.space)

    def give(self, card: Card) -> None:
        self.hand.append(card)

    def has_card(self, card: Card) -> bool:
        return card in self.hand

    def count(self, card: Card) -> int:
        return self.hand.count(card)

    def remove_card(self, card: Card) -> Card:
        """Remove one copy of `card` from the hand."""
        try:
            self.hand.remove(card)
        except ValueError:
            raise PlayerDoesNotHaveThisCard(card) from None
        return card

    def remove_random_card(self, rng: random.Random) -> Card:
        if not self.hand:
            raise PlayerHasNoCardsLeft()
        return self.hand.pop(rng.randrange(len(self.hand)))

    def last_space_card(self) -> SpaceCard | None:
        return self.space[-1] if self.space else None

    def in_solar_flare(self) -> bool:
        """A player sitting on a SolarFlare can't play or defend with cards."""
        return self.last_space_card() == SpaceCard.SOLAR_FLARE


@dataclass
class GameEvent:
    """One entry of the game trace."""
    kind: str
    player: int | None = None
    data: dict[str, Any] = field(default_factory=dict)

    def describe(self) -> str:
        details = ", ".join(f"{k}={v}" for k, v in self.data.items())
        who = f"player {self.player}: " if self.player is not None else ""
        return f"{who}{self.kind}" + (f" ({details})" if details else "")


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    Created by `new_game()`; mutated by the action resolver, the space
    effect resolver and the game loop.
    """
    seed: int
    rng: random.Random
    action_deck: ActionDeck
    space_deck: SpaceDeck
    players: list[PlayerState] = field(default_factory=list)

    whose_turn: PlayerReference = field(default_factory=lambda: PlayerReference(0))
    phase: Phase = Phase.PICKUP
    turn_number: int = 0

    game_over: bool = False
    winner: PlayerReference | None = None

    # Game trace (for replay comparison and logging)
    history: list[GameEvent] = field(default_factory=list)

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def current_player(self) -> PlayerState:
        return self.players[self.whose_turn.index]

    def references(self) -> Iterator[PlayerReference]:
        for index in range(len(self.players)):
            yield PlayerReference(index)

    def living(self) -> list[PlayerReference]:
        return [ref for ref in self.references() if self.players[ref.index].alive]

    def player(self, ref: PlayerReference) -> PlayerState:
        """Resolve a reference, rejecting anything that is not a seat."""
        if not isinstance(ref, PlayerReference) or not 0 <= ref.index < len(self.players):
            raise PlayerDoesNotExist(ref)
        return self.players[ref.index]

    def require_phase(self, phase: Phase) -> None:
        if self.phase != phase:
            raise EngineContractError(f"Expected phase {phase.value}, game is in {self.phase.value}")

    def next_living_after(self, ref: PlayerReference) -> PlayerReference:
        """Next living seat after `ref`, wrapping around."""
        count = len(self.players)
        for step in range(1, count + 1):
            candidate = PlayerReference((ref.index + step) % count)
            if self.players[candidate.index].alive:
                return candidate
        raise EngineContractError("No living players left")

    def draw_card(self, ref: PlayerReference) -> Card:
        """Draw one action card into a player's hand."""
        card = self.action_deck.draw(self.rng)
        self.player(ref).give(card)
        return card

    def discard_from_hand(self, ref: PlayerReference, card: Card) -> None:
        """Move one card from a player's hand to the discard pile."""
        self.player(ref).remove_card(card)
        self.action_deck.add_to_discard(card)

    def eliminate(self, ref: PlayerReference, reason: str) -> None:
        """
        Mark a player as dead and check for a winner.

        Turn order is handled by the game loop: the dead player is simply
        skipped from now on.
        """
        player = self.player(ref)
        if not player.alive:
            raise EngineContractError(f"Player {ref} is already dead")
        player.alive = False
        self.record("player_died", ref, reason=reason)

        survivors = self.living()
        if len(survivors) == 1:
            self.game_over = True
            self.winner = survivors[0]
            self.record("game_over", survivors[0])

    def advance_turn(self) -> None:
        """Hand the turn to the next living player."""
        self.phase = Phase.PICKUP
        self.turn_number += 1
        if not self.game_over:
            self.whose_turn = self.next_living_after(self.whose_turn)

    def record(self, kind: str, player: PlayerReference | None = None, **data: Any) -> GameEvent:
        """Append an event to the trace and log it."""
        event = GameEvent(
            kind=kind,
            player=player.index if player is not None else None,
            data={k: _plain(v) for k, v in data.items()},
        )
        self.history.append(event)
        logger.debug(kind, player=event.player, turn=self.turn_number, **event.data)
        return event

    def clone(self) -> GameState:
        """Deep copy the state, RNG included."""
        return deepcopy(self)


def _plain(value: Any) -> Any:
    """Make event payloads comparable and printable."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, PlayerReference):
        return value.index
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value
