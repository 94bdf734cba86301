"""
Engine errors.

Two tiers:
- GameRuleError: a player (or their Agent) asked for something the rules
  forbid. Recoverable; the game loop logs it and ends the Actions phase.
- EngineContractError: the engine broke its own bookkeeping. Fatal; never
  caught inside the engine.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .cards import Card
    from .state import PlayerReference


class SelfishError(Exception):
    """Base class for every engine error."""
    code = "SELFISH_ERROR"


class EngineContractError(SelfishError):
    """Internal invariant violated (wrong phase, missing card after validation...)."""
    code = "CONTRACT_VIOLATION"


class GameRuleError(SelfishError):
    """A move that the rules do not allow."""
    code = "GAME_RULE_ERROR"


class CantAttackYourself(GameRuleError):
    code = "CANT_ATTACK_YOURSELF"

    def __init__(self):
        super().__init__("You can't attack yourself!")


class CantSwapWithYourself(GameRuleError):
    code = "CANT_SWAP_WITH_YOURSELF"

    def __init__(self):
        super().__init__("You can't swap space tracks with yourself!")


class PlayerHasNoCardsLeft(GameRuleError):
    code = "PLAYER_HAS_NO_CARDS_LEFT"

    def __init__(self):
        super().__init__("Player has no cards!")


class PlayerDoesNotHaveEnoughCards(GameRuleError):
    code = "PLAYER_DOES_NOT_HAVE_ENOUGH_CARDS"

    def __init__(self, player: PlayerReference, count: int):
        self.player = player
        self.count = count
        super().__init__(f"Player {player} does not have enough cards to steal {count}!")


class PlayerDoesNotHaveThisCard(GameRuleError):
    code = "PLAYER_DOES_NOT_HAVE_THIS_CARD"

    def __init__(self, card: Card):
        self.card = card
        super().__init__(f"You don't have a {card} card!")


class PlayerDoesNotExist(GameRuleError):
    code = "PLAYER_DOES_NOT_EXIST"

    def __init__(self, player: PlayerReference):
        self.player = player
        super().__init__(f"Player {player} does not exist!")


class PlayerIsEliminated(GameRuleError):
    code = "PLAYER_IS_ELIMINATED"

    def __init__(self, player: PlayerReference):
        self.player = player
        super().__init__(f"Player {player} is out of the game!")


class PlayerInSolarFlare(GameRuleError):
    code = "PLAYER_IN_SOLAR_FLARE"

    def __init__(self, player: PlayerReference):
        self.player = player
        super().__init__(f"Player {player} is in a solar flare and can't use action cards!")


class MissingTarget(GameRuleError):
    code = "MISSING_TARGET"

    def __init__(self, card: Card):
        self.card = card
        super().__init__(f"{card} needs a target player!")


class InvalidDiscardCount(GameRuleError):
    code = "INVALID_DISCARD_COUNT"

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid discard count. Expected {expected} but got {actual}.")


class NotAnActionCard(GameRuleError):
    code = "NOT_AN_ACTION_CARD"

    def __init__(self, card: Card):
        self.card = card
        super().__init__(f"{card} can't be played as an action!")
