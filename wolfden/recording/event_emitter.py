"""
Event emitter that fans game events out to subscribers and an optional recorder.
"""

import logging
from typing import Any, Callable, Dict, List, Optional
from threading import Lock

from .run_recorder import RunRecorder

logger = logging.getLogger(__name__)

Subscriber = Callable[[str, Dict[str, Any]], None]


class EventEmitter:
    """Delivers engine events to presentation collaborators."""

    def __init__(self, run_recorder: Optional[RunRecorder] = None):
        self.run_recorder = run_recorder
        self._subscribers: List[Subscriber] = []
        self._lock = Lock()

    def subscribe(self, callback: Subscriber) -> None:
        """Register `callback(event_type, data)`."""
        with self._lock:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    def _emit(self, event_type: str, data: Dict[str, Any]) -> None:
        """Emit an event to subscribers and the recorder."""
        with self._lock:
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(event_type, data)
            except Exception:
                # Don't let a broken listener break the game
                logger.exception("Event subscriber failed on %s", event_type)

        if self.run_recorder:
            try:
                self.run_recorder.record_event(event_type, data)
            except OSError as e:
                logger.error("Error recording event %s: %s", event_type, e)

    def emit_game_start(self, game_id: str, players: List[Dict[str, Any]]) -> None:
        """Emit game start event."""
        self._emit("game_start", {
            "game_id": game_id,
            "players": players,
        })

    def emit_phase_change(self, phase: str, day_count: int) -> None:
        """Emit phase change event."""
        self._emit("phase_change", {
            "phase": phase,
            "day_count": day_count,
        })

    def emit_announcement(self, message, phase: str, day_count: int) -> None:
        """Emit moderator announcement event."""
        self._emit("announcement", {
            "message": message.to_dict(),
            "phase": phase,
            "day_count": day_count,
        })

    def emit_chat(self, message, phase: str, day_count: int) -> None:
        """Emit player chat event."""
        self._emit("chat", {
            "message": message.to_dict(),
            "phase": phase,
            "day_count": day_count,
        })

    def emit_vote(self, voter_id: str, target_id: str, action_type: str, day_count: int) -> None:
        """Emit individual vote or night choice event."""
        self._emit("vote", {
            "voter": voter_id,
            "target": target_id,
            "action_type": action_type,
            "day_count": day_count,
        })

    def emit_elimination(self, player_id: str, phase: str, day_count: int) -> None:
        """Emit player elimination event."""
        self._emit("elimination", {
            "player_id": player_id,
            "phase": phase,
            "day_count": day_count,
        })

    def emit_game_state_update(self, game_state: Dict[str, Any]) -> None:
        """Emit game state update event."""
        self._emit("game_state_update", {
            "game_state": game_state
        })

    def emit_game_over(self, winner: Optional[str], day_count: int) -> None:
        """Emit game over event."""
        self._emit("game_over", {
            "winner": winner,
            "day_count": day_count,
        })
