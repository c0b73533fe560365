"""Engine -> adapter notifications over blinker signals"""
from typing import Dict

from blinker import Signal

EVENT_SESSION_STARTED = "session_started"  # payload: level
EVENT_PIECE_SPAWNED = "piece_spawned"      # payload: kind, x, y
EVENT_PIECE_LOCKED = "piece_locked"        # payload: kind, cells=[(x,y),...]
EVENT_LINES_CLEARED = "lines_cleared"      # payload: count, rows=[y,...]
EVENT_SCORE_CHANGED = "score_changed"      # payload: score, delta
EVENT_TOKENS_AWARDED = "tokens_awarded"    # payload: tokens, delta
EVENT_LEVEL_UP = "level_up"                # payload: level
EVENT_PAUSE_TOGGLED = "pause_toggled"      # payload: paused
EVENT_GAME_OVER = "game_over"              # payload: score, tokens, level, lines


class EventBus:
    """Named blinker signals; handlers receive the bus as sender plus the payload."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # strong refs so lambdas and throwaway handlers stay connected
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)
