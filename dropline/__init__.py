"""
Dropline - Connect Four Game Engine

A pure, deterministic engine for two-player gravity games of the
Connect Four family. The package provides:
- An immutable board and game state
- A reducer that turns (state, command) into a new state
- Win detection over all four axes of alignment
- Handle-based sessions and an HTTP facade for rendering layers
"""

__version__ = "0.1.0"
