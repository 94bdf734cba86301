"""
Tests for the reducer (action resolution).

Tests:
- Validation: rejected actions change nothing
- Shield defense
- Each action card's effect
- Card conservation
"""

import pytest

from ..engine_core.action import Action, StealAccess
from ..engine_core.cards import Card, SpaceCard
from ..engine_core.errors import (
    CantAttackYourself,
    EngineContractError,
    MissingTarget,
    NotAnActionCard,
    PlayerDoesNotExist,
    PlayerDoesNotHaveEnoughCards,
    PlayerDoesNotHaveThisCard,
    PlayerInSolarFlare,
    PlayerIsEliminated,
)
from ..engine_core.invariants import check_conservation
from ..engine_core.reducer import ActionResolver, apply_action
from ..engine_core.setup import new_game
from ..engine_core.state import Phase, PlayerReference
from ..session import GameLoop
from .conftest import P0, P1, P2, put_on_top, set_hand, snapshot, stack_space_deck


class TestValidation:
    """Illegal actions are rejected before anything moves."""

    def test_self_attack_rejected(self, two_player_game, resolver):
        game = two_player_game
        set_hand(game, P0, [Card.TRACTOR_BEAM, Card.O1])
        before = snapshot(game)

        with pytest.raises(CantAttackYourself):
            resolver.resolve(game, Action.tractor_beam(P0))

        assert snapshot(game) == before

    def test_self_attack_rejected_even_without_the_card(self, two_player_game, resolver):
        before = snapshot(two_player_game)

        with pytest.raises(CantAttackYourself):
            resolver.resolve(two_player_game, Action.laser_blast(P0))

        assert snapshot(two_player_game) == before

    def test_validate_changes_nothing(self, two_player_game, resolver):
        """The loop checks an action before spending the card."""
        game = two_player_game
        set_hand(game, P0, [Card.TETHER, Card.O1])
        before = snapshot(game)
        events = len(game.history)

        resolver.validate(game, Action.tether(P1))
        with pytest.raises(PlayerDoesNotHaveThisCard):
            resolver.validate(game, Action.laser_blast(P1))

        assert snapshot(game) == before
        assert len(game.history) == events

    def test_wrong_phase_is_contract_violation(self, two_player_game, resolver):
        game = two_player_game
        game.phase = Phase.PICKUP
        set_hand(game, P0, [Card.TRACTOR_BEAM])

        with pytest.raises(EngineContractError):
            resolver.resolve(game, Action.tractor_beam(P1))

    def test_not_enough_cards_to_steal(self, two_player_game, resolver):
        """OxygenSiphon needs the target to hold at least two cards."""
        game = two_player_game
        set_hand(game, P0, [Card.OXYGEN_SIPHON])
        set_hand(game, P1, [Card.O1])
        before = snapshot(game)

        with pytest.raises(PlayerDoesNotHaveEnoughCards) as excinfo:
            resolver.resolve(game, Action.oxygen_siphon(P1))

        assert excinfo.value.player == P1
        assert excinfo.value.count == 2
        assert snapshot(game) == before

    def test_card_not_in_hand(self, two_player_game, resolver):
        game = two_player_game
        before = snapshot(game)

        with pytest.raises(PlayerDoesNotHaveThisCard):
            resolver.resolve(game, Action.tractor_beam(P1))

        assert snapshot(game) == before

    def test_nonexistent_target(self, two_player_game, resolver):
        set_hand(two_player_game, P0, [Card.HACK_SUIT])

        with pytest.raises(PlayerDoesNotExist):
            resolver.resolve(two_player_game, Action.hack_suit(PlayerReference(9)))

    def test_dead_target(self, three_player_game, resolver):
        game = three_player_game
        set_hand(game, P0, [Card.TRACTOR_BEAM])
        game.eliminate(P2, reason="test")
        before = snapshot(game)

        with pytest.raises(PlayerIsEliminated):
            resolver.resolve(game, Action.tractor_beam(P2))

        assert snapshot(game) == before

    def test_missing_target(self, two_player_game, resolver):
        set_hand(two_player_game, P0, [Card.TRACTOR_BEAM])

        with pytest.raises(MissingTarget):
            resolver.resolve(two_player_game, Action(card=Card.TRACTOR_BEAM))

    def test_oxygen_is_not_an_action(self, two_player_game, resolver):
        with pytest.raises(NotAnActionCard):
            resolver.resolve(two_player_game, Action(card=Card.O1))

    def test_solar_flare_blocks_actions(self, two_player_game, resolver):
        game = two_player_game
        set_hand(game, P0, [Card.ROCKET_BOOSTER])
        game.player(P0).space = [SpaceCard.SOLAR_FLARE]

        with pytest.raises(PlayerInSolarFlare):
            resolver.resolve(game, Action.rocket_booster())

    def test_apply_action_wraps_rule_errors(self, two_player_game, agents):
        result = apply_action(two_player_game, agents, Action.tractor_beam(P0))

        assert not result.success
        assert result.error_code == "CANT_ATTACK_YOURSELF"
        assert isinstance(result.exception, CantAttackYourself)


class TestShieldDefense:
    """Tests for blocking attacks with a Shield."""

    def test_defended_attack_is_skipped(self, two_player_game, agents, resolver):
        game = two_player_game
        set_hand(game, P0, [Card.TRACTOR_BEAM])
        set_hand(game, P1, [Card.SHIELD, Card.O1, Card.O2])
        agents[1].defences.append(True)

        result = resolver.resolve(game, Action.tractor_beam(P1))

        assert result.success
        assert result.defended
        assert game.player(P0).hand == []
        assert game.player(P1).hand == [Card.O1, Card.O2]
        assert game.action_deck.discard[-2:] == [Card.SHIELD, Card.TRACTOR_BEAM]
        check_conservation(game)

    def test_declined_defense_keeps_shield(self, two_player_game, agents, resolver):
        game = two_player_game
        set_hand(game, P0, [Card.LASER_BLAST])
        set_hand(game, P1, [Card.SHIELD])
        game.player(P1).space = [SpaceCard.BLANK_SPACE]
        agents[1].defences.append(False)

        result = resolver.resolve(game, Action.laser_blast(P1))

        assert not result.defended
        assert game.player(P1).hand == [Card.SHIELD]
        assert game.player(P1).space == []

    def test_no_defense_in_solar_flare(self, two_player_game, agents, resolver):
        """A target sitting on a SolarFlare is never asked to defend."""
        game = two_player_game
        set_hand(game, P0, [Card.LASER_BLAST])
        set_hand(game, P1, [Card.SHIELD])
        game.player(P1).space = [SpaceCard.BLANK_SPACE, SpaceCard.SOLAR_FLARE]

        resolver.resolve(game, Action.laser_blast(P1))

        assert agents[1].asked("defend") == 0
        assert game.player(P1).space == [SpaceCard.BLANK_SPACE]
        assert game.player(P1).hand == [Card.SHIELD]

    def test_no_shield_no_question(self, two_player_game, agents, resolver):
        set_hand(two_player_game, P0, [Card.TETHER])
        set_hand(two_player_game, P1, [Card.O1])

        resolver.resolve(two_player_game, Action.tether(P1))

        assert agents[1].asked("defend") == 0

    def test_defender_sees_their_own_view(self, two_player_game, agents, resolver):
        set_hand(two_player_game, P0, [Card.TETHER])
        set_hand(two_player_game, P1, [Card.SHIELD])

        resolver.resolve(two_player_game, Action.tether(P1))

        assert agents[1].state.viewer == P1
        assert agents[1].state.hand == (Card.SHIELD,)


class TestOxygenSiphon:
    """Tests for the OxygenSiphon steal and its tax."""

    def test_takes_two_gives_one(self, two_player_game, resolver):
        game = two_player_game
        set_hand(game, P0, [Card.OXYGEN_SIPHON])
        set_hand(game, P1, [Card.O1, Card.O1, Card.O1, Card.O2])

        resolver.resolve(game, Action.oxygen_siphon(P1))

        assert game.player(P0).hand == [Card.O1]
        assert game.player(P1).count(Card.O1) == 1
        assert game.player(P1).alive
        assert game.action_deck.discard[-2:] == [Card.O1, Card.OXYGEN_SIPHON]
        check_conservation(game)

    def test_last_o1_kills_target(self, three_player_game, resolver):
        game = three_player_game
        set_hand(game, P0, [Card.OXYGEN_SIPHON])
        set_hand(game, P1, [Card.O1, Card.O2])

        resolver.resolve(game, Action.oxygen_siphon(P1))

        assert game.player(P0).hand == [Card.O1]
        assert not game.player(P1).alive
        assert game.player(P1).hand == [Card.O2]
        assert game.whose_turn == P0
        check_conservation(game)

    def test_no_o1_kills_target(self, three_player_game, agents, resolver):
        game = three_player_game
        set_hand(game, P0, [Card.OXYGEN_SIPHON])
        set_hand(game, P1, [Card.O2, Card.SHIELD])
        agents[1].defences.append(False)

        resolver.resolve(game, Action.oxygen_siphon(P1))

        assert game.player(P0).hand == []
        assert not game.player(P1).alive
        check_conservation(game)

    def test_killing_the_last_opponent_ends_the_game(self, two_player_game, resolver):
        game = two_player_game
        set_hand(game, P0, [Card.OXYGEN_SIPHON])
        set_hand(game, P1, [Card.O2, Card.TETHER])

        resolver.resolve(game, Action.oxygen_siphon(P1))

        assert game.game_over
        assert game.winner == P0

    def test_tax_lands_on_discard_pile(self, two_player_game, resolver):
        """Exactly two O1: the target keeps living with none left."""
        game = two_player_game
        set_hand(game, P0, [Card.OXYGEN_SIPHON])
        set_hand(game, P1, [Card.O1, Card.O1, Card.O2])

        resolver.resolve(game, Action.oxygen_siphon(P1))

        assert game.player(P1).alive
        assert game.player(P1).hand == [Card.O2]
        taxed = [e for e in game.history if e.data.get("source") == "siphon_tax"]
        assert [(e.kind, e.player) for e in taxed] == [("discarded", 1)]
        check_conservation(game)


class TestSteals:
    """Tests for HackSuit and TractorBeam."""

    def test_hack_suit_offers_distinct_kinds(self, two_player_game, agents, resolver):
        game = two_player_game
        set_hand(game, P0, [Card.HACK_SUIT])
        set_hand(game, P1, [Card.O2, Card.O1, Card.O1, Card.TETHER])
        agents[0].takes.append(Card.TETHER)

        resolver.resolve(game, Action.hack_suit(P1))

        assert ("choose_card_to_take", (Card.O1, Card.O2, Card.TETHER)) in agents[0].calls
        assert game.player(P0).hand == [Card.TETHER]
        assert sorted(game.player(P1).hand) == sorted([Card.O2, Card.O1, Card.O1])
        check_conservation(game)

    def test_hack_suit_bad_choice_still_spends_card(self, two_player_game, agents, resolver):
        game = two_player_game
        set_hand(game, P0, [Card.HACK_SUIT])
        set_hand(game, P1, [Card.O1])
        agents[0].takes.append(Card.SHIELD)

        with pytest.raises(PlayerDoesNotHaveThisCard):
            resolver.resolve(game, Action.hack_suit(P1))

        assert game.player(P1).hand == [Card.O1]
        assert game.player(P0).hand == []
        assert game.action_deck.discard[-1] == Card.HACK_SUIT
        check_conservation(game)

    def test_tractor_beam_scenario(self, agents):
        """Pickup a TractorBeam, fire it at a 5-card hand: 6 vs 4 cards."""
        game = new_game(2, seed=2024)
        put_on_top(game, Card.TRACTOR_BEAM)
        loop = GameLoop(game, agents[:2])
        assert loop.pickup() == Card.TRACTOR_BEAM
        assert len(game.player(P0).hand) == 6

        loop.resolver.resolve(game, Action.tractor_beam(P1))

        assert len(game.player(P0).hand) == 6
        assert len(game.player(P1).hand) == 4
        assert Card.TRACTOR_BEAM not in game.player(P0).hand
        assert game.action_deck.discard == [Card.TRACTOR_BEAM]
        check_conservation(game)

    def test_tractor_beam_uses_game_rng(self, two_player_game, agents):
        """Same RNG state, same stolen card."""
        game = two_player_game
        set_hand(game, P0, [Card.TRACTOR_BEAM])
        set_hand(game, P1, [Card.O1, Card.O2, Card.TETHER, Card.HOLE_IN_SUIT])
        replay = game.clone()

        ActionResolver(agents).resolve(game, Action.tractor_beam(P1))
        ActionResolver(agents).resolve(replay, Action.tractor_beam(P1))

        assert game.player(P0).hand == replay.player(P0).hand
        assert len(game.player(P0).hand) == 1


    def test_steal_rules(self):
        """Each stealing card picks its card a different way."""
        siphon = Action.oxygen_siphon(P1).rules().steal
        assert (siphon.count, siphon.access, siphon.card) == (2, StealAccess.SPECIFIC, Card.O1)
        assert Action.hack_suit(P1).rules().steal.access == StealAccess.SEE_CARDS_AND_CHOOSE
        assert Action.tractor_beam(P1).rules().steal.access == StealAccess.RANDOM
        assert Action.laser_blast(P1).rules().steal is None


class TestMovementActions:
    """Tests for RocketBooster and LaserBlast."""

    def test_rocket_booster_travels(self, two_player_game, resolver):
        game = two_player_game
        set_hand(game, P0, [Card.ROCKET_BOOSTER])
        stack_space_deck(game, SpaceCard.BLANK_SPACE)

        resolver.resolve(game, Action.rocket_booster())

        assert game.player(P0).space == [SpaceCard.BLANK_SPACE]
        assert game.action_deck.discard[-1] == Card.ROCKET_BOOSTER

    def test_rocket_booster_card_survives_a_meteoroid(self, two_player_game, agents, resolver):
        """The booster is already in play, so a forced discard can't pick it."""
        game = two_player_game
        set_hand(game, P0, [Card.ROCKET_BOOSTER] + [Card.O1] * 7)
        stack_space_deck(game, SpaceCard.METEOROID)

        resolver.resolve(game, Action.rocket_booster())

        assert agents[0].asked("forced_discard") == 1
        assert len(game.player(P0).hand) == 5
        check_conservation(game)

    def test_laser_blast_pushes_back(self, two_player_game, resolver):
        game = two_player_game
        set_hand(game, P0, [Card.LASER_BLAST])
        game.player(P1).space = [SpaceCard.BLANK_SPACE, SpaceCard.WORM_HOLE]

        resolver.resolve(game, Action.laser_blast(P1))

        assert game.player(P1).space == [SpaceCard.BLANK_SPACE]

    def test_laser_blast_on_empty_track(self, two_player_game, resolver):
        game = two_player_game
        set_hand(game, P0, [Card.LASER_BLAST])

        result = resolver.resolve(game, Action.laser_blast(P1))

        assert result.success
        assert game.player(P1).space == []
        assert game.action_deck.discard[-1] == Card.LASER_BLAST


class TestPlaceholderActions:
    """HoleInSuit and Tether only spend the card."""

    @pytest.mark.parametrize("card", [Card.HOLE_IN_SUIT, Card.TETHER])
    def test_no_effect_but_discarded(self, two_player_game, resolver, card):
        game = two_player_game
        set_hand(game, P0, [card, Card.O1])
        target_hand = list(game.player(P1).hand)

        result = resolver.resolve(game, Action(card=card, target=P1))

        assert result.success
        assert game.player(P0).hand == [Card.O1]
        assert game.player(P1).hand == target_hand
        assert game.action_deck.discard[-1] == card
        check_conservation(game)
