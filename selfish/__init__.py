"""
Selfish - Space Edition simulation engine

A deterministic, seed-reproducible engine for the Selfish card game.
The engine provides:
- State management with seeded shuffles
- Action card resolution with shield defenses
- Space track effects
- A turn loop driven by pluggable Agents
"""

__version__ = "0.1.0"
