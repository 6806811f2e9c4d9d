"""
Run recorder: one directory per game with an event transcript, metadata and
the final state.

    runs/<run_name>/events.jsonl      one JSON event per line, numbered
    runs/<run_name>/metadata.json     who played, the seed, and once over, the winner
    runs/<run_name>/final_state.json  GameEngine.to_dict() at the end of the game
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

EVENTS_FILE = "events.jsonl"
METADATA_FILE = "metadata.json"
FINAL_STATE_FILE = "final_state.json"


class RunRecorder:
    """Writes a game's events and results under `runs_dir`."""

    def __init__(self, runs_dir: str = "runs"):
        self.runs_dir = Path(runs_dir)
        self.run_dir: Optional[Path] = None
        self._lock = Lock()
        self._sequence = 0
        self._metadata: Dict[str, Any] = {}

    @property
    def events_file(self) -> Optional[Path]:
        return self.run_dir / EVENTS_FILE if self.run_dir else None

    def create_run(self, run_name: Optional[str] = None) -> str:
        """Create the run directory. Returns the run name (a timestamp unless given)."""
        run_name = run_name or datetime.now().strftime("game_%Y%m%d_%H%M%S")
        self.run_dir = self.runs_dir / run_name
        self.run_dir.mkdir(parents=True, exist_ok=True)
        self._sequence = 0
        self._metadata = {}
        return run_name

    def get_run_path(self) -> Optional[Path]:
        return self.run_dir

    def start_game(self, game_id: str, players: List[Dict[str, Any]], settings: Dict[str, Any]) -> None:
        """Write the opening metadata: the table and the settings it was played with."""
        self._update_metadata(
            game_id=game_id,
            started_at=datetime.now().isoformat(),
            players=players,
            settings=settings,
            winner=None,
        )

    def record_event(self, event_type: str, data: Dict[str, Any]) -> None:
        """Append one event to the transcript; `game_over` also settles the metadata."""
        if self.run_dir is None:
            return

        with self._lock:
            line = json.dumps({
                "sequence": self._sequence,
                "timestamp": datetime.now().isoformat(),
                "event_type": event_type,
                "data": data,
            })
            self._sequence += 1
            with open(self.run_dir / EVENTS_FILE, "a") as f:
                f.write(line + "\n")

        if event_type == "game_over":
            self._update_metadata(
                winner=data.get("winner"),
                days=data.get("day_count"),
                finished_at=datetime.now().isoformat(),
            )

    def save_final_state(self, state: Dict[str, Any]) -> None:
        """Store the engine's plain-data state (`GameEngine.to_dict()`)."""
        if self.run_dir is None:
            return
        with self._lock:
            (self.run_dir / FINAL_STATE_FILE).write_text(json.dumps(state, indent=2))

    def read_events(self) -> List[Dict[str, Any]]:
        """Events recorded so far, in order. Unreadable lines are skipped."""
        path = self.events_file
        if path is None or not path.exists():
            return []

        events = []
        for line_number, line in enumerate(path.read_text().splitlines(), start=1):
            if not line.strip():
                continue
            try:
                events.append(json.loads(line))
            except json.JSONDecodeError:
                logger.warning("Skipping corrupt event on line %d of %s", line_number, path)
        return events

    def read_metadata(self) -> Dict[str, Any]:
        if self.run_dir is None or not (self.run_dir / METADATA_FILE).exists():
            return {}
        return json.loads((self.run_dir / METADATA_FILE).read_text())

    def _update_metadata(self, **fields: Any) -> None:
        if self.run_dir is None:
            return
        with self._lock:
            self._metadata.update(fields)
            (self.run_dir / METADATA_FILE).write_text(json.dumps(self._metadata, indent=2))
