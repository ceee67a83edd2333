"""
Trace module.

Provides the replayable record of a search run:
- TraceEvent / EventKind: Single algorithmic events with log lines
- FrontierEntry: Value copy of one frontier entry
- Trace: Immutable events + per-visit frontier snapshots
- TraceRecorder: Builds a Trace while an algorithm runs
- PseudocodeLine: The seven shared pseudocode categories
"""

from pathfinder.trace.events import (
    EVENT_LINES,
    EventKind,
    FrontierEntry,
    FrontierSnapshot,
    Trace,
    TraceEvent,
)
from pathfinder.trace.pseudocode import PSEUDOCODE, PseudocodeLine, pseudocode_for
from pathfinder.trace.recorder import TraceRecorder, format_number

__all__ = [
    "EVENT_LINES",
    "EventKind",
    "FrontierEntry",
    "FrontierSnapshot",
    "Trace",
    "TraceEvent",
    "TraceRecorder",
    "PSEUDOCODE",
    "PseudocodeLine",
    "pseudocode_for",
    "format_number",
]
