"""
Engine Core - Deterministic game state management and effect resolution.

The engine is the runtime that:
1. Sets up a seeded GameState
2. Projects what each player may see
3. Applies action cards via the reducer
4. Resolves space track effects
"""

from .cards import Card, SpaceCard, ACTION_DECK_COMPOSITION, SPACE_DECK_COMPOSITION
from .deck import ActionDeck, SpaceDeck
from .state import GameState, GameEvent, PlayerState, PlayerReference, Phase, BreatheOrTravel
from .action import Action, ActionResult, ActionRules, Steal, StealAccess
from .errors import SelfishError, GameRuleError, EngineContractError
from .visibility import VisibleState, VisiblePlayer, project
from .reducer import ActionResolver, apply_action
from .effect_resolver import SpaceEffectResolver, TravelContext
from .setup import new_game

__all__ = [
    "Card",
    "SpaceCard",
    "ACTION_DECK_COMPOSITION",
    "SPACE_DECK_COMPOSITION",
    "ActionDeck",
    "SpaceDeck",
    "GameState",
    "GameEvent",
    "PlayerState",
    "PlayerReference",
    "Phase",
    "BreatheOrTravel",
    "Action",
    "ActionResult",
    "ActionRules",
    "Steal",
    "StealAccess",
    "SelfishError",
    "GameRuleError",
    "EngineContractError",
    "VisibleState",
    "VisiblePlayer",
    "project",
    "ActionResolver",
    "apply_action",
    "SpaceEffectResolver",
    "TravelContext",
    "new_game",
]
