"""
Action System - Actions, steal rules, and results.

An Action is one action card played during the Actions phase, optionally
aimed at another player. Actions are validated and applied by the
ActionResolver in reducer.py.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .cards import Card
from .state import PlayerReference


class StealAccess(Enum):
    """How the attacker gets to pick the stolen card."""
    SPECIFIC = "specific"  # Always the same kind of card
    RANDOM = "random"  # Picked by the game RNG
    SEE_CARDS_AND_CHOOSE = "see_cards_and_choose"  # Attacker sees the kinds held


@dataclass(frozen=True)
class Steal:
    count: int
    access: StealAccess
    card: Card | None = None  # Only for SPECIFIC


@dataclass(frozen=True)
class ActionRules:
    steal: Steal | None = None


ACTION_RULES: dict[Card, ActionRules] = {
    Card.OXYGEN_SIPHON: ActionRules(steal=Steal(count=2, access=StealAccess.SPECIFIC, card=Card.O1)),
    Card.HACK_SUIT: ActionRules(steal=Steal(count=1, access=StealAccess.SEE_CARDS_AND_CHOOSE)),
    Card.TRACTOR_BEAM: ActionRules(steal=Steal(count=1, access=StealAccess.RANDOM)),
    Card.ROCKET_BOOSTER: ActionRules(),
    Card.LASER_BLAST: ActionRules(),
    Card.HOLE_IN_SUIT: ActionRules(),
    Card.TETHER: ActionRules(),
}

# Cards that can be played as an action, and whether they need a target
PLAYABLE_CARDS: dict[Card, bool] = {
    Card.OXYGEN_SIPHON: True,
    Card.HACK_SUIT: True,
    Card.TRACTOR_BEAM: True,
    Card.ROCKET_BOOSTER: False,
    Card.LASER_BLAST: True,
    Card.HOLE_IN_SUIT: True,
    Card.TETHER: True,
}


@dataclass(frozen=True)
class Action:
    """
    A card played by the current player.

    `target` is the attacked player for targeted cards, None for
    RocketBooster.
    """
    card: Card
    target: PlayerReference | None = None

    @property
    def is_targeted(self) -> bool:
        return PLAYABLE_CARDS.get(self.card, False)

    @property
    def attacking(self) -> PlayerReference | None:
        return self.target if self.is_targeted else None

    def rules(self) -> ActionRules:
        return ACTION_RULES.get(self.card, ActionRules())

    @property
    def stealing(self) -> int | None:
        steal = self.rules().steal
        return steal.count if steal else None

    def __str__(self) -> str:
        if self.attacking is not None:
            return f"{self.card} -> player {self.target}"
        return str(self.card)

    @classmethod
    def oxygen_siphon(cls, target: PlayerReference) -> Action:
        return cls(card=Card.OXYGEN_SIPHON, target=target)

    @classmethod
    def hack_suit(cls, target: PlayerReference) -> Action:
        return cls(card=Card.HACK_SUIT, target=target)

    @classmethod
    def tractor_beam(cls, target: PlayerReference) -> Action:
        return cls(card=Card.TRACTOR_BEAM, target=target)

    @classmethod
    def rocket_booster(cls) -> Action:
        return cls(card=Card.ROCKET_BOOSTER)

    @classmethod
    def laser_blast(cls, target: PlayerReference) -> Action:
        return cls(card=Card.LASER_BLAST, target=target)

    @classmethod
    def hole_in_suit(cls, target: PlayerReference) -> Action:
        return cls(card=Card.HOLE_IN_SUIT, target=target)

    @classmethod
    def tether(cls, target: PlayerReference) -> Action:
        return cls(card=Card.TETHER, target=target)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action went through (a shield block still counts)
    - Errors (if rejected)
    - Human-readable changes
    """
    success: bool
    action: Action | None = None
    defended: bool = False
    error: str | None = None
    error_code: str | None = None
    exception: Exception | None = None

    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: Exception, action: Action | None = None) -> ActionResult:
        """Create a failure result from a game-rule error."""
        return cls(
            success=False,
            action=action,
            error=str(error),
            error_code=getattr(error, "code", None),
            exception=error,
        )

    @classmethod
    def succeeded(
        cls,
        action: Action,
        defended: bool = False,
        changes: list[str] | None = None,
    ) -> ActionResult:
        return cls(
            success=True,
            action=action,
            defended=defended,
            state_changes=changes or [],
        )
