"""JSON key-value store for the schedule state.

The whole ScheduleState is stored as one camelCase JSON document, the
same shape the schedule has always been persisted in. Loading tolerates a
missing or empty file by returning the initial state; writes are atomic
(temp file + replace).
"""

import os
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from zenith.core.errors import StateStoreError
from zenith.schedule.types import ScheduleState, initial_state


def dump_state(state: ScheduleState) -> str:
    """Serialize a state to its persisted JSON form."""
    return state.model_dump_json(by_alias=True, exclude_none=True, indent=2)


def load_state(text: str) -> ScheduleState:
    """Parse a persisted JSON document.

    Raises:
        pydantic.ValidationError: If the document is not a valid schedule
    """
    return ScheduleState.model_validate_json(text)


class JsonStateStore:
    """File-backed store holding a single schedule state."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def load(self) -> ScheduleState:
        """Load the stored state.

        Returns:
            The stored state, or the initial state if nothing usable is stored.
            An unreadable document is moved aside to "<name>.corrupt" first.
        """
        if not self.path.exists():
            logger.debug("No stored schedule, starting empty", path=str(self.path))
            return initial_state()

        try:
            text = self.path.read_text(encoding="utf-8")
            if not text.strip():
                return initial_state()
            return load_state(text)
        except (UnicodeDecodeError, ValidationError) as e:
            backup = self.path.with_name(self.path.name + ".corrupt")
            logger.warning(
                "Stored schedule is unreadable, starting empty",
                path=str(self.path),
                backup=str(backup),
                error=type(e).__name__,
            )
            os.replace(self.path, backup)
            return initial_state()

    def save(self, state: ScheduleState) -> None:
        """Atomically write the state.

        Raises:
            StateStoreError: If the file cannot be written
        """
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(dump_state(state), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            raise StateStoreError([f"Could not write {self.path}: {e}"]) from e
        logger.debug(
            "Schedule saved",
            path=str(self.path),
            time_blocks=len(state.time_blocks),
            activities=len(state.activities),
        )
