"""
Visibility - What a fair player may observe about the game.

`project()` is the only channel from the engine to an Agent. It exposes:
- whose turn it is
- the viewer's own hand
- for every player: alive flag, hand size, space track

Other players' hand contents never leave the engine.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

from pydantic import BaseModel, Field

from .cards import Card, SpaceCard
from .state import PlayerReference

if TYPE_CHECKING:
    from .state import GameState
    from ..agents.base import Agent


class VisiblePlayer(BaseModel):
    """Public information about one seat."""
    alive: bool
    hand_size: int = Field(ge=0)
    space: tuple[SpaceCard, ...] = ()

    model_config = {"frozen": True}

    @property
    def distance(self) -> int:
        return len(self.space)

    @property
    def in_solar_flare(self) -> bool:
        return bool(self.space) and self.space[-1] == SpaceCard.SOLAR_FLARE


class VisibleState(BaseModel):
    """Snapshot of the game from one player's seat."""
    viewer: PlayerReference
    whose_turn: PlayerReference
    hand: tuple[Card, ...] = ()
    players: tuple[VisiblePlayer, ...] = ()

    model_config = {"frozen": True}

    @property
    def me(self) -> VisiblePlayer:
        return self.players[self.viewer.index]

    @property
    def is_my_turn(self) -> bool:
        return self.viewer == self.whose_turn

    @property
    def in_solar_flare(self) -> bool:
        return self.me.in_solar_flare

    def opponents(self) -> list[PlayerReference]:
        """Living players other than the viewer."""
        return [
            PlayerReference(index)
            for index, player in enumerate(self.players)
            if player.alive and index != self.viewer.index
        ]

    def has_card(self, card: Card) -> bool:
        return card in self.hand


def project(game: GameState, viewer: PlayerReference) -> VisibleState:
    """Build the view of `game` that `viewer` is allowed to see."""
    me = game.player(viewer)
    return VisibleState(
        viewer=viewer,
        whose_turn=game.whose_turn,
        hand=tuple(me.hand),
        players=tuple(
            VisiblePlayer(
                alive=player.alive,
                hand_size=len(player.hand),
                space=tuple(player.space),
            )
            for player in game.players
        ),
    )


def consult(game: GameState, agents: Sequence[Agent], ref: PlayerReference) -> Agent:
    """Push a fresh snapshot to a player's Agent and hand it back for a query."""
    game.player(ref)
    agent = agents[ref.index]
    agent.update_state(project(game, ref))
    return agent
