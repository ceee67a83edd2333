"""
Player module.

Provides step building and playback:
- Step: One renderable projection of a trace
- build_steps: Explore-then-reveal step sequence from a SearchResult
- PlayerSession: Editable substrate + seekable, cancellable playback
- PlayerView: Renderer-facing state at the current step
"""

from pathfinder.player.session import MODES, PlayerSession, PlayerView
from pathfinder.player.steps import Step, build_steps

__all__ = [
    "MODES",
    "PlayerSession",
    "PlayerView",
    "Step",
    "build_steps",
]
