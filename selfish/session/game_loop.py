"""
Game Loop - The turn/phase controller.

Each living player's turn runs:
1. Pickup: draw one action card
2. Actions: ask the Agent for action cards until it passes
3. Breathe or travel: spend an O1 to stay put, or an O2 to move along
   the space track; a player with neither suffocates
4. Hand the turn to the next living player

The loop ends when a single player is left alive.

Agents that ask for illegal moves are not re-prompted: the error is
logged and the rest of the Actions phase is skipped.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from ..agents.base import Agent, RandomAgent
from ..config import get_settings
from ..engine_core.action import Action
from ..engine_core.cards import Card
from ..engine_core.errors import GameRuleError
from ..engine_core.invariants import check_conservation, check_turn_holder
from ..engine_core.reducer import ActionResolver
from ..engine_core.setup import new_game
from ..engine_core.state import BreatheOrTravel, GameState, Phase
from ..engine_core.visibility import consult
from ..utils.logging import get_logger

logger = get_logger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    RUNNING = "running"
    GAME_OVER = "game_over"
    TURN_LIMIT = "turn_limit"  # Stopped by the safety limit


@dataclass
class TurnResult:
    """What happened during one player's turn."""
    player: int
    turn_number: int
    picked_up: Card | None = None
    actions: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    # breathed, travelled, suffocated, died, aborted or game_over
    ending: str = ""
    game_over: bool = False
    winner: int | None = None


@dataclass
class GameResult:
    """Summary of a finished (or stopped) game."""
    seed: int
    turns: int
    finished: bool
    winner: int | None = None
    eliminations: list[int] = field(default_factory=list)  # In order of death


class GameLoop:
    """
    The main game loop driver.

    Usage:
        game = new_game(num_players=4, seed=42)
        loop = GameLoop(game, [RandomAgent(seed=i) for i in range(4)])
        result = loop.run()
        print(result.winner)
    """

    def __init__(self, game: GameState, agents: Sequence[Agent], check_invariants: bool = False):
        if len(agents) != game.player_count:
            raise ValueError(f"Need {game.player_count} agents, got {len(agents)}")
        self.game = game
        self.agents = list(agents)
        self.resolver = ActionResolver(agents=self.agents)
        self.check_invariants = check_invariants
        self.state = LoopState.GAME_OVER if game.game_over else LoopState.RUNNING

    def pickup(self) -> Card:
        """Draw the turn's card and open the Actions phase."""
        game = self.game
        game.require_phase(Phase.PICKUP)
        card = game.draw_card(game.whose_turn)
        game.record("picked_up", game.whose_turn, card=card, source="pickup")
        game.phase = Phase.ACTIONS
        return card

    def run_actions(self, result: TurnResult) -> None:
        """Ask the current Agent for actions until it passes or breaks a rule."""
        game = self.game
        game.require_phase(Phase.ACTIONS)
        actor = game.whose_turn

        while not game.game_over and game.player(actor).alive:
            if game.player(actor).in_solar_flare():
                game.record("solar_flare_no_actions", actor)
                break

            action: Action | None = consult(game, self.agents, actor).play_action()
            if action is None:
                break

            try:
                self.resolver.validate(game, action)
            except GameRuleError as e:
                self._rule_broken(result, "action_rejected", action, e)
                break

            try:
                outcome = self.resolver.resolve(game, action)
            except GameRuleError as e:
                # The card was already spent; an Agent answer during resolution broke a rule
                self._rule_broken(result, "action_aborted", action, e)
                break
            result.actions.extend(outcome.state_changes)

    def _rule_broken(self, result: TurnResult, kind: str, action: Action, error: GameRuleError) -> None:
        actor = self.game.whose_turn
        logger.warning(kind, player=actor.index, action=str(action), error=str(error))
        self.game.record(kind, actor, action=str(action), error=error.code)
        result.errors.append(str(error))

    def breathe_or_travel(self) -> str:
        """
        Spend oxygen for the turn.

        No oxygen at all: the player dies. Only one kind: it is played
        automatically. Both: the Agent chooses.
        """
        game = self.game
        game.require_phase(Phase.ACTIONS)
        game.phase = Phase.BREATHE_OR_TRAVEL

        ref = game.whose_turn
        player = game.player(ref)
        has_o1 = player.has_card(Card.O1)
        has_o2 = player.has_card(Card.O2)

        if not has_o1 and not has_o2:
            game.eliminate(ref, reason="no_oxygen")
            return "suffocated"

        if has_o1 and has_o2:
            choice = consult(game, self.agents, ref).breathe_or_travel()
        elif has_o1:
            choice = BreatheOrTravel.BREATHE
        else:
            choice = BreatheOrTravel.TRAVEL

        if choice == BreatheOrTravel.TRAVEL:
            game.discard_from_hand(ref, Card.O2)
            game.record("travelled", ref)
            self.resolver.space.advance(game, ref)
            return "travelled"

        game.discard_from_hand(ref, Card.O1)
        game.record("breathed", ref)
        return "breathed"

    def play_turn(self) -> TurnResult:
        """Play one full turn for the current player."""
        game = self.game
        ref = game.whose_turn
        result = TurnResult(player=ref.index, turn_number=game.turn_number)
        if game.game_over:
            result.ending = "game_over"
            result.game_over = True
            result.winner = game.winner.index if game.winner else None
            return result

        result.picked_up = self.pickup()
        self.run_actions(result)

        if game.game_over:
            result.ending = "game_over"
        elif not game.player(ref).alive:
            result.ending = "died"
        else:
            try:
                result.ending = self.breathe_or_travel()
            except GameRuleError as e:
                logger.warning("turn_aborted", player=ref.index, error=str(e))
                game.record("turn_aborted", ref, error=e.code)
                result.errors.append(str(e))
                result.ending = "aborted"
            if not game.player(ref).alive and result.ending != "suffocated":
                result.ending = "died"

        game.advance_turn()

        if self.check_invariants:
            check_conservation(game)
            check_turn_holder(game)

        if game.game_over:
            self.state = LoopState.GAME_OVER
            result.game_over = True
            result.winner = game.winner.index if game.winner else None
            logger.info("game_over", winner=result.winner, turns=game.turn_number, seed=game.seed)
        return result

    def run(self, max_turns: int | None = None) -> GameResult:
        """Play turns until one player is left or the safety limit is hit."""
        if max_turns is None:
            max_turns = get_settings().max_turns

        turns = 0
        while not self.game.game_over and turns < max_turns:
            self.play_turn()
            turns += 1

        if not self.game.game_over:
            self.state = LoopState.TURN_LIMIT
            logger.warning("turn_limit_reached", turns=turns, seed=self.game.seed)

        return GameResult(
            seed=self.game.seed,
            turns=turns,
            finished=self.game.game_over,
            winner=self.game.winner.index if self.game.winner else None,
            eliminations=[
                event.player for event in self.game.history if event.kind == "player_died"
            ],
        )


def random_agents(seed: int, count: int) -> list[RandomAgent]:
    """Seeded RandomAgents, one per seat, derived from the game seed."""
    return [RandomAgent(seed=(seed + index + 1) % 2**64) for index in range(count)]


def simulate(
    num_players: int,
    seed: int | None = None,
    agents: Sequence[Agent] | None = None,
    max_turns: int | None = None,
    check_invariants: bool = False,
) -> tuple[GameState, GameResult]:
    """Set up a game and run it to the end."""
    game = new_game(num_players, seed=seed)
    if agents is None:
        agents = random_agents(game.seed, num_players)
    loop = GameLoop(game, agents, check_invariants=check_invariants)
    return game, loop.run(max_turns=max_turns)
