"""
Agents module - Player decision-making.

Provides:
- Agent: Interface the engine queries for every decision
- FirstEligibleAgent: Deterministic baseline
- RandomAgent: Seeded random play for simulations
- ScriptedAgent: Replays queued decisions (tests)
- InteractiveAgent: Terminal prompts for a human
"""

from .base import Agent, FirstEligibleAgent, RandomAgent
from .scripted import ScriptedAgent
from .interactive import InteractiveAgent, PlayerQuit

__all__ = [
    "Agent",
    "FirstEligibleAgent",
    "RandomAgent",
    "ScriptedAgent",
    "InteractiveAgent",
    "PlayerQuit",
]
