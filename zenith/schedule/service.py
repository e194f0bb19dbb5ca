"""Schedule service wiring the reconciliation engine to storage.

This module provides the boundary layer that:
1. Loads the current state from the store
2. Dispatches one command through the pure engine
3. Persists the new state only when the command was applied

Metrics and recommendations are read from the stored state.
"""

from loguru import logger

from zenith.config.settings import Settings
from zenith.metrics.calculator import compute_metrics
from zenith.metrics.types import MetricsConfig, ScheduleMetrics
from zenith.recommendations.rules import build_recommendations
from zenith.recommendations.types import Recommendation
from zenith.schedule.commands import CommandResult, ScheduleCommand
from zenith.schedule.reducer import dispatch
from zenith.schedule.types import ScheduleState
from zenith.storage.json_store import JsonStateStore


class ScheduleService:
    """Single-writer access to a persisted schedule."""

    def __init__(self, store: JsonStateStore, metrics_config: MetricsConfig | None = None):
        self.store = store
        self.metrics_config = metrics_config or MetricsConfig()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScheduleService":
        return cls(JsonStateStore(settings.state_file), MetricsConfig.from_settings(settings))

    def state(self) -> ScheduleState:
        return self.store.load()

    def execute(self, command: ScheduleCommand) -> CommandResult:
        """Apply a command to the stored state and persist the result.

        Args:
            command: Command to apply

        Returns:
            CommandResult; rejected commands leave the store untouched

        Raises:
            StateStoreError: If the new state cannot be written
        """
        result = dispatch(self.store.load(), command)
        if not result.applied:
            logger.info(f"{command.type} rejected", errors=result.errors)
            return result

        self.store.save(result.state)
        return result

    def metrics(self) -> ScheduleMetrics:
        return compute_metrics(self.state(), self.metrics_config)

    def recommendations(self) -> list[Recommendation]:
        return build_recommendations(self.state(), self.metrics_config)
