"""
Session Module - Runs games.

A session is one play-through of a game:
- Created from a seed and one Agent per seat
- Advanced one turn at a time by the GameLoop
- Finished when a single player is left alive

Sessions are single-threaded and in-memory only.
"""

from .game_loop import GameLoop, LoopState, TurnResult, GameResult, simulate, random_agents

__all__ = [
    "GameLoop",
    "LoopState",
    "TurnResult",
    "GameResult",
    "simulate",
    "random_agents",
]
