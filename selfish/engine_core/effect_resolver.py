"""
Space Effect Resolver - Moves a player along the space track.

Every advance draws one space card, appends it to the traveler's track,
then applies its effect. Some effects ask the traveler's Agent for a
decision (forced discards, wormhole partner); some eliminate the traveler.

Hyperspace chains are resolved with a pending-jump counter instead of
recursion. The space deck holds a fixed number of Hyperspace cards and
never refills, so the chain always ends.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Sequence

from .cards import Card, SpaceCard, METEOROID_DISCARD_COUNT, METEOROID_HAND_LIMIT
from .errors import (
    CantSwapWithYourself,
    InvalidDiscardCount,
    PlayerDoesNotHaveThisCard,
    PlayerIsEliminated,
)
from .state import GameState, PlayerReference
from .visibility import consult

if TYPE_CHECKING:
    from ..agents.base import Agent


@dataclass
class TravelContext:
    """Bookkeeping for one call to `advance`, including chained jumps."""
    traveler: PlayerReference
    pending_jumps: int = 1
    drawn: list[SpaceCard] = field(default_factory=list)
    exhausted: bool = False


@dataclass
class SpaceEffectResolver:
    """
    Applies space card effects.

    Stateless between calls; holds the Agents so it can ask the traveler
    for decisions.
    """
    agents: Sequence[Agent]

    def advance(self, game: GameState, traveler: PlayerReference) -> TravelContext:
        """
        Move `traveler` one step along the space track.

        Returns the context listing every card drawn, Hyperspace chains included.
        """
        context = TravelContext(traveler=traveler)
        player = game.player(traveler)

        while context.pending_jumps > 0 and player.alive:
            context.pending_jumps -= 1

            if game.space_deck.is_empty:
                context.exhausted = True
                game.record("space_deck_exhausted", traveler)
                break

            card = game.space_deck.draw()
            player.space.append(card)
            context.drawn.append(card)
            game.record("space_card_drawn", traveler, card=card, distance=player.distance)

            handler = self._get_handler(card)
            handler(game, context)

        return context

    def _get_handler(self, card: SpaceCard) -> Callable[[GameState, TravelContext], None]:
        handlers = {
            SpaceCard.BLANK_SPACE: self._handle_blank_space,
            SpaceCard.USEFUL_JUNK: self._handle_useful_junk,
            SpaceCard.MYSTERIOUS_NEBULA: self._handle_mysterious_nebula,
            SpaceCard.HYPERSPACE: self._handle_hyperspace,
            SpaceCard.METEOROID: self._handle_meteoroid,
            SpaceCard.COSMIC_RADIATION: self._handle_cosmic_radiation,
            SpaceCard.ASTEROID_FIELD: self._handle_asteroid_field,
            SpaceCard.GRAVITATIONAL_ANOMALY: self._handle_gravitational_anomaly,
            SpaceCard.WORM_HOLE: self._handle_worm_hole,
            SpaceCard.SOLAR_FLARE: self._handle_solar_flare,
        }
        return handlers[card]

    def _handle_blank_space(self, game: GameState, context: TravelContext) -> None:
        pass

    def _handle_useful_junk(self, game: GameState, context: TravelContext) -> None:
        card = game.draw_card(context.traveler)
        game.record("picked_up", context.traveler, card=card, source="useful_junk")

    def _handle_mysterious_nebula(self, game: GameState, context: TravelContext) -> None:
        for _ in range(2):
            card = game.draw_card(context.traveler)
            game.record("picked_up", context.traveler, card=card, source="mysterious_nebula")

    def _handle_hyperspace(self, game: GameState, context: TravelContext) -> None:
        context.pending_jumps += 1

    def _handle_meteoroid(self, game: GameState, context: TravelContext) -> None:
        player = game.player(context.traveler)
        if len(player.hand) <= METEOROID_HAND_LIMIT:
            game.record("meteoroid_missed", context.traveler, hand_size=len(player.hand))
            return

        agent = consult(game, self.agents, context.traveler)
        cards = list(agent.forced_discard(METEOROID_DISCARD_COUNT))
        self.discard_chosen(game, context.traveler, cards, METEOROID_DISCARD_COUNT)
        game.record("meteoroid_hit", context.traveler, discarded=cards)

    def _handle_cosmic_radiation(self, game: GameState, context: TravelContext) -> None:
        self._discard_or_die(game, context.traveler, "cosmic_radiation")

    def _handle_asteroid_field(self, game: GameState, context: TravelContext) -> None:
        for _ in range(2):
            if not game.player(context.traveler).alive:
                break
            self._discard_or_die(game, context.traveler, "asteroid_field")

    def _handle_gravitational_anomaly(self, game: GameState, context: TravelContext) -> None:
        game.player(context.traveler).space.pop()
        game.record("moved_back", context.traveler, source="gravitational_anomaly")

    def _handle_worm_hole(self, game: GameState, context: TravelContext) -> None:
        traveler = context.traveler
        partners = [ref for ref in game.living() if ref != traveler]
        if not partners:
            game.record("worm_hole_no_partner", traveler)
            return

        agent = consult(game, self.agents, traveler)
        other = agent.choose_player_to_swap_with()

        other_player = game.player(other)
        if other == traveler:
            raise CantSwapWithYourself()
        if not other_player.alive:
            raise PlayerIsEliminated(other)

        player = game.player(traveler)
        player.space, other_player.space = other_player.space, player.space
        game.record("space_swapped", traveler, other=other)

    def _handle_solar_flare(self, game: GameState, context: TravelContext) -> None:
        # Only matters while it is the top of the track; checked by the
        # action resolver and the game loop.
        pass

    def _discard_or_die(self, game: GameState, ref: PlayerReference, reason: str) -> None:
        if game.player(ref).has_card(Card.O1):
            game.discard_from_hand(ref, Card.O1)
            game.record("discarded", ref, card=Card.O1, source=reason)
        else:
            game.eliminate(ref, reason=reason)

    @staticmethod
    def discard_chosen(
        game: GameState,
        ref: PlayerReference,
        cards: list[Card],
        expected: int,
    ) -> None:
        """
        Discard exactly `expected` cards chosen by the player.

        Nothing is removed unless the whole selection is valid.
        """
        if len(cards) != expected:
            raise InvalidDiscardCount(expected=expected, actual=len(cards))

        held = Counter(game.player(ref).hand)
        for card, wanted in Counter(cards).items():
            if held[card] < wanted:
                raise PlayerDoesNotHaveThisCard(card)

        for card in cards:
            game.discard_from_hand(ref, card)
