from .engine import WheelEngine, SpinResult
from .entry import Entry, GamePhase, RemovedEntry

__all__ = ['WheelEngine', 'SpinResult', 'Entry', 'GamePhase', 'RemovedEntry']
