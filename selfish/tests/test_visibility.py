"""
Tests for the visibility projector.

Agents may only see their own hand; for everyone else, hand sizes,
alive flags and space tracks.
"""

import pytest
from pydantic import ValidationError

from ..agents import ScriptedAgent
from ..engine_core.cards import Card, SpaceCard
from ..engine_core.visibility import VisibleState, consult, project
from .conftest import P0, P1, P2, set_hand


class TestProject:
    """Tests for project()."""

    def test_viewer_sees_own_hand_only(self, three_player_game):
        game = three_player_game
        set_hand(game, P1, [Card.SHIELD, Card.O1, Card.O2])

        view = project(game, P1)

        assert view.viewer == P1
        assert view.hand == (Card.SHIELD, Card.O1, Card.O2)
        assert [p.hand_size for p in view.players] == [5, 3, 5]
        assert "hand" not in view.players[0].model_dump()

    def test_whose_turn_is_the_game_turn(self, three_player_game):
        view = project(three_player_game, P2)

        assert view.whose_turn == P0
        assert not view.is_my_turn

    def test_space_and_alive_are_public(self, three_player_game):
        game = three_player_game
        game.players[2].space = [SpaceCard.BLANK_SPACE, SpaceCard.SOLAR_FLARE]
        game.players[1].alive = False

        view = project(game, P0)

        assert view.players[2].space == (SpaceCard.BLANK_SPACE, SpaceCard.SOLAR_FLARE)
        assert view.players[2].in_solar_flare
        assert view.players[2].distance == 2
        assert not view.players[1].alive
        assert view.opponents() == [P2]

    def test_has_card_checks_own_hand(self, three_player_game):
        set_hand(three_player_game, P0, [Card.TETHER])
        set_hand(three_player_game, P1, [Card.SHIELD])

        view = project(three_player_game, P0)

        assert view.has_card(Card.TETHER)
        assert not view.has_card(Card.SHIELD)

    def test_snapshot_is_detached_from_game(self, two_player_game):
        """Later game changes don't leak into an old snapshot."""
        game = two_player_game
        view = project(game, P0)

        game.player(P0).hand.clear()

        assert len(view.hand) == 5
        assert view.me.hand_size == 5

    def test_snapshot_is_frozen(self, two_player_game):
        view = project(two_player_game, P0)

        with pytest.raises(ValidationError):
            view.whose_turn = P1

    def test_serializes(self, two_player_game):
        view = project(two_player_game, P0)

        restored = VisibleState.model_validate(view.model_dump())

        assert restored == view


class TestConsult:
    """Tests for pushing snapshots to Agents."""

    def test_consult_pushes_viewer_snapshot(self, two_player_game):
        agents = [ScriptedAgent(), ScriptedAgent()]

        agent = consult(two_player_game, agents, P1)

        assert agent is agents[1]
        assert agent.state is not None
        assert agent.state.viewer == P1
        assert agents[0].state is None
