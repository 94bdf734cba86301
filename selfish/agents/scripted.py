"""
Scripted agent - replays queued decisions.

Each kind of decision has its own queue. When a queue runs dry the agent
falls back to FirstEligibleAgent behaviour, so tests only script what
they care about. Every question asked is recorded in `calls`.
"""

from __future__ import annotations
from collections import deque
from typing import Any, Iterable, Sequence

from .base import FirstEligibleAgent
from ..engine_core.action import Action
from ..engine_core.cards import Card
from ..engine_core.state import BreatheOrTravel, PlayerReference


class ScriptedAgent(FirstEligibleAgent):
    """
    Usage:
        agent = ScriptedAgent(actions=[Action.tractor_beam(PlayerReference(1)), None])
        agent.defences.append(False)
    """

    def __init__(
        self,
        actions: Iterable[Action | None] = (),
        breathe_or_travel: Iterable[BreatheOrTravel] = (),
        defences: Iterable[bool] = (),
        discards: Iterable[Sequence[Card]] = (),
        swaps: Iterable[PlayerReference] = (),
        takes: Iterable[Card] = (),
    ):
        super().__init__()
        self.actions: deque[Action | None] = deque(actions)
        self.choices: deque[BreatheOrTravel] = deque(breathe_or_travel)
        self.defences: deque[bool] = deque(defences)
        self.discards: deque[Sequence[Card]] = deque(discards)
        self.swaps: deque[PlayerReference] = deque(swaps)
        self.takes: deque[Card] = deque(takes)
        self.calls: list[tuple[str, Any]] = []

    def play_action(self) -> Action | None:
        self.calls.append(("play_action", None))
        if self.actions:
            return self.actions.popleft()
        return super().play_action()

    def breathe_or_travel(self) -> BreatheOrTravel:
        self.calls.append(("breathe_or_travel", None))
        if self.choices:
            return self.choices.popleft()
        return super().breathe_or_travel()

    def defend(self, action: Action) -> bool:
        self.calls.append(("defend", action))
        if self.defences:
            return self.defences.popleft()
        return super().defend(action)

    def forced_discard(self, count: int) -> Sequence[Card]:
        self.calls.append(("forced_discard", count))
        if self.discards:
            return self.discards.popleft()
        return super().forced_discard(count)

    def choose_player_to_swap_with(self) -> PlayerReference:
        self.calls.append(("choose_player_to_swap_with", None))
        if self.swaps:
            return self.swaps.popleft()
        return super().choose_player_to_swap_with()

    def choose_card_to_take(self, kinds: Sequence[Card]) -> Card:
        self.calls.append(("choose_card_to_take", tuple(kinds)))
        if self.takes:
            return self.takes.popleft()
        return super().choose_card_to_take(kinds)

    def asked(self, question: str) -> int:
        """How many times a given question was asked."""
        return sum(1 for name, _ in self.calls if name == question)
