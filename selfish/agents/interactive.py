"""
Interactive agent - asks a human on the terminal.

Input and output functions are injectable so the agent can be driven
from tests or another front end.
"""

from __future__ import annotations
from typing import Callable, Sequence

from .base import Agent
from ..engine_core.action import Action, PLAYABLE_CARDS
from ..engine_core.cards import Card
from ..engine_core.state import BreatheOrTravel, PlayerReference

CARDS_BY_NAME = {card.value.lower(): card for card in Card}


class PlayerQuit(Exception):
    """The human closed the input stream."""


def parse_card(text: str) -> Card | None:
    return CARDS_BY_NAME.get(text.strip().lower())


def parse_player(text: str) -> PlayerReference | None:
    text = text.strip()
    if not text.isdigit():
        return None
    return PlayerReference(int(text))


class InteractiveAgent(Agent):
    """
    Terminal prompts for every decision.

    Actions are typed as `<card> [player]`, e.g. `TractorBeam 2`, or
    `pass` (or an empty line) to stop playing cards. Closing the input
    (Ctrl-D) raises PlayerQuit.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] | None = None,
        output_fn: Callable[[str], None] = print,
    ):
        super().__init__()
        self.input_fn = input_fn or input
        self.output_fn = output_fn

    def ask(self, prompt: str) -> str:
        try:
            return self.input_fn(prompt)
        except EOFError:
            raise PlayerQuit() from None

    def update_state(self, state) -> None:
        super().update_state(state)
        self.output_fn(self.render())

    def render(self) -> str:
        if self.state is None:
            return ""
        lines = []
        for index, player in enumerate(self.state.players):
            marker = "x" if not player.alive else ("->" if index == self.state.whose_turn.index else "  ")
            you = " (you)" if index == self.state.viewer.index else ""
            space = ", ".join(card.value for card in player.space) or "-"
            lines.append(f"{marker:>2} player {index}{you}: {player.hand_size} cards | space: {space}")
        lines.append("Your hand: " + ", ".join(card.value for card in self.state.hand))
        return "\n".join(lines)

    def play_action(self) -> Action | None:
        while True:
            answer = self.ask("Play a card (e.g. 'TractorBeam 1') or 'pass': ").strip()
            if answer.lower() in ("", "pass"):
                return None

            parts = answer.split()
            card = parse_card(parts[0])
            if card is None or card not in PLAYABLE_CARDS:
                self.output_fn(f"'{parts[0]}' is not an action card.")
                continue
            if self.state is not None and not self.state.has_card(card):
                self.output_fn(f"You don't have a {card} card.")
                continue
            if not PLAYABLE_CARDS[card]:
                return Action(card=card)
            if len(parts) < 2 or parse_player(parts[1]) is None:
                self.output_fn(f"{card} needs a target player number.")
                continue
            return Action(card=card, target=parse_player(parts[1]))

    def breathe_or_travel(self) -> BreatheOrTravel:
        while True:
            answer = self.ask("Breathe (b) or travel (t)? ").strip().lower()
            if answer in ("b", "breathe"):
                return BreatheOrTravel.BREATHE
            if answer in ("t", "travel"):
                return BreatheOrTravel.TRAVEL
            self.output_fn("Please answer 'b' or 't'.")

    def defend(self, action: Action) -> bool:
        answer = self.ask(f"You are attacked with {action.card}. Use a shield? [y/N] ")
        return answer.strip().lower() in ("y", "yes")

    def forced_discard(self, count: int) -> Sequence[Card]:
        while True:
            answer = self.ask(f"Discard {count} cards (space separated): ")
            cards = [parse_card(part) for part in answer.split()]
            if len(cards) == count and all(card is not None for card in cards):
                return cards
            self.output_fn(f"Please name exactly {count} cards.")

    def choose_player_to_swap_with(self) -> PlayerReference:
        while True:
            ref = parse_player(self.ask("Wormhole! Swap space tracks with player: "))
            if ref is not None:
                return ref
            self.output_fn("Please enter a player number.")

    def choose_card_to_take(self, kinds: Sequence[Card]) -> Card:
        options = ", ".join(card.value for card in kinds)
        while True:
            card = parse_card(self.ask(f"Take one of: {options}: "))
            if card in kinds:
                return card
            self.output_fn(f"Please pick one of: {options}.")
