"""
Reducer - Applies actions to the game state.

The reducer is the single entry point for Actions-phase moves.
All action cards go through ActionResolver.resolve().

Design principles:
- Validates before applying: a rejected action changes nothing
- Gives the target a chance to block with a Shield
- The spent action card always ends on the discard pile once validated
- Delegates travel (RocketBooster) to SpaceEffectResolver
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Sequence

from .action import Action, ActionResult, PLAYABLE_CARDS, StealAccess
from .cards import Card
from .effect_resolver import SpaceEffectResolver
from .errors import (
    CantAttackYourself,
    EngineContractError,
    GameRuleError,
    MissingTarget,
    NotAnActionCard,
    PlayerDoesNotHaveEnoughCards,
    PlayerDoesNotHaveThisCard,
    PlayerInSolarFlare,
    PlayerIsEliminated,
)
from .state import GameState, Phase, PlayerReference
from .visibility import consult
from ..utils.logging import get_logger

if TYPE_CHECKING:
    from ..agents.base import Agent

logger = get_logger(__name__)


@dataclass
class ActionResolver:
    """
    Resolves action cards played by the current player.

    Stateless - all state is in GameState. Holds the Agents so targets
    can be asked whether to defend.
    """
    agents: Sequence[Agent]
    space: SpaceEffectResolver = field(init=False)

    def __post_init__(self):
        self.space = SpaceEffectResolver(agents=self.agents)

    def resolve(self, game: GameState, action: Action) -> ActionResult:
        """
        Play `action` for the current player.

        Raises GameRuleError if the action is illegal; in that case the
        game state is untouched.
        """
        self.validate(game, action)
        actor = game.whose_turn

        # The card is in play from here on
        try:
            game.player(actor).remove_card(action.card)
        except PlayerDoesNotHaveThisCard as e:
            raise EngineContractError(f"Validated card vanished: {e}") from e
        game.record("action_played", actor, card=action.card, target=action.attacking)

        defended = False
        try:
            target = action.attacking
            if target is not None and self.can_defend(game, target):
                if consult(game, self.agents, target).defend(action):
                    self._use_shield(game, target)
                    defended = True
                    game.record("defended", target, card=action.card, attacker=actor)

            if not defended:
                handler = self._get_handler(action.card)
                handler(game, actor, action)
        finally:
            game.action_deck.add_to_discard(action.card)

        return ActionResult.succeeded(
            action,
            defended=defended,
            changes=[f"Player {actor} played {action}" + (" (blocked)" if defended else "")],
        )

    def validate(self, game: GameState, action: Action) -> None:
        """
        Raise the first rule the current player's action breaks.

        Read-only: calling it never changes the game.
        """
        game.require_phase(Phase.ACTIONS)
        actor = game.whose_turn
        target = action.attacking
        if target is not None and target == actor:
            raise CantAttackYourself()

        player = game.player(actor)
        if player.in_solar_flare():
            raise PlayerInSolarFlare(actor)
        if action.card not in PLAYABLE_CARDS:
            raise NotAnActionCard(action.card)
        if not player.has_card(action.card):
            raise PlayerDoesNotHaveThisCard(action.card)

        if not action.is_targeted:
            return
        if target is None:
            raise MissingTarget(action.card)

        target_player = game.player(target)
        if not target_player.alive:
            raise PlayerIsEliminated(target)

        steal_count = action.stealing
        if steal_count is not None and len(target_player.hand) < steal_count:
            raise PlayerDoesNotHaveEnoughCards(target, steal_count)

    def can_defend(self, game: GameState, ref: PlayerReference) -> bool:
        """A player can block with a Shield unless they sit in a solar flare."""
        player = game.player(ref)
        return player.has_card(Card.SHIELD) and not player.in_solar_flare()

    def _use_shield(self, game: GameState, ref: PlayerReference) -> None:
        try:
            game.discard_from_hand(ref, Card.SHIELD)
        except PlayerDoesNotHaveThisCard as e:
            raise EngineContractError(f"Defender lost their shield: {e}") from e

    def _get_handler(self, card: Card) -> Callable[[GameState, PlayerReference, Action], None]:
        """Get the handler function for an action card."""
        handlers = {
            Card.OXYGEN_SIPHON: self._handle_oxygen_siphon,
            Card.HACK_SUIT: self._handle_hack_suit,
            Card.TRACTOR_BEAM: self._handle_tractor_beam,
            Card.ROCKET_BOOSTER: self._handle_rocket_booster,
            Card.LASER_BLAST: self._handle_laser_blast,
            Card.HOLE_IN_SUIT: self._handle_no_effect,
            Card.TETHER: self._handle_no_effect,
        }
        return handlers[card]

    def _handle_oxygen_siphon(self, game: GameState, actor: PlayerReference, action: Action) -> None:
        """
        Take oxygen from the target.

        The target loses `steal.count` O1 but the attacker only keeps one;
        the rest go to the discard pile. A target left without O1 dies.
        """
        steal = action.rules().steal
        target = action.target
        victim = game.player(target)
        available = victim.count(steal.card)

        if available == 0:
            game.eliminate(target, reason="no_oxygen_to_siphon")
        elif available == 1:
            self._take_card(game, actor, action)
            game.eliminate(target, reason="oxygen_siphoned")
        else:
            self._take_card(game, actor, action)
            for _ in range(steal.count - 1):
                game.discard_from_hand(target, steal.card)
                game.record("discarded", target, card=steal.card, source="siphon_tax")

    def _handle_hack_suit(self, game: GameState, actor: PlayerReference, action: Action) -> None:
        self._take_card(game, actor, action)

    def _handle_tractor_beam(self, game: GameState, actor: PlayerReference, action: Action) -> None:
        self._take_card(game, actor, action)

    def _take_card(self, game: GameState, actor: PlayerReference, action: Action) -> Card:
        """Move one card from the target to the actor, picked as the card's steal rule says."""
        steal = action.rules().steal
        target = action.target
        victim = game.player(target)

        if steal.access == StealAccess.SPECIFIC:
            card = victim.remove_card(steal.card)
        elif steal.access == StealAccess.RANDOM:
            card = victim.remove_random_card(game.rng)
        else:
            # The attacker sees which kinds the target holds, not how many
            kinds = tuple(kind for kind in Card if victim.has_card(kind))
            card = consult(game, self.agents, actor).choose_card_to_take(kinds)
            if card not in kinds:
                raise PlayerDoesNotHaveThisCard(card)
            victim.remove_card(card)

        game.player(actor).give(card)
        game.record("stole", actor, card=card, victim=target)
        return card

    def _handle_rocket_booster(self, game: GameState, actor: PlayerReference, action: Action) -> None:
        self.space.advance(game, actor)

    def _handle_laser_blast(self, game: GameState, actor: PlayerReference, action: Action) -> None:
        target = action.target
        space = game.player(target).space
        if space:
            card = space.pop()
            game.record("moved_back", target, card=card, source="laser_blast")
        else:
            game.record("no_effect", target, card=action.card)

    def _handle_no_effect(self, game: GameState, actor: PlayerReference, action: Action) -> None:
        # HoleInSuit and Tether have no rules yet; playing them just spends the card
        game.record("no_effect", actor, card=action.card)


def apply_action(game: GameState, agents: Sequence[Agent], action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates an ActionResolver and applies the action. Game-rule errors
    come back as a failed ActionResult; contract errors propagate.
    """
    resolver = ActionResolver(agents=agents)
    try:
        return resolver.resolve(game, action)
    except GameRuleError as e:
        logger.warning("action_rejected", player=game.whose_turn.index, action=str(action), error=str(e))
        return ActionResult.failure(e, action=action)
