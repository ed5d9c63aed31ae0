import logging
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from satnogsctl.model import ProgressEvent, ProgressEventType

DEFAULT_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


@dataclass
class LoggingConfig:
    format: str = DEFAULT_LOG_FORMAT
    handlers: list[logging.Handler] = field(default_factory=list)


class ProgressReporter(ABC):
    """Base class for progress reporters, fed through the event bus."""

    @classmethod
    def logging_config(cls) -> LoggingConfig:
        return LoggingConfig(handlers=[logging.StreamHandler(sys.stderr)])

    @abstractmethod
    def start(self, total_items: int | None = None) -> None: ...

    @abstractmethod
    def add_task(self, item_id: str, description: str) -> Any: ...

    @abstractmethod
    def set_task_duration(self, item_id: str, total: int) -> None: ...

    @abstractmethod
    def update_progress(self, item_id: str, advance: int | None = None, description: str | None = None) -> None: ...

    @abstractmethod
    def end_task(self, item_id: str, success: bool, description: str | None = None) -> None: ...

    @abstractmethod
    def stop(self) -> None: ...

    def start_batch(self, batch_id: str, total_items: int, description: str | None = None) -> None:
        pass

    def end_batch(self, batch_id: str, success_count: int, failure_count: int) -> None:
        pass

    def handle(self, event: ProgressEvent) -> None:
        """Dispatch a bus event to the matching reporter hook."""
        data = event.data
        if event.type == ProgressEventType.BATCH_STARTED:
            self.start_batch(event.task_id, data.get("total_items", 0), data.get("description"))
        elif event.type == ProgressEventType.BATCH_COMPLETED:
            self.end_batch(event.task_id, data.get("success_count", 0), data.get("failure_count", 0))
        elif event.type == ProgressEventType.TASK_CREATED:
            self.add_task(event.task_id, data.get("description", ""))
        elif event.type == ProgressEventType.TASK_DURATION:
            self.set_task_duration(event.task_id, data["duration"])
        elif event.type == ProgressEventType.TASK_PROGRESS:
            self.update_progress(event.task_id, data.get("advance"), data.get("description"))
        elif event.type == ProgressEventType.TASK_COMPLETED:
            self.end_task(event.task_id, data.get("success", True), data.get("description"))


class EmptyProgressReporter(ProgressReporter):
    """
    Empty reporter to avoid continuos checks against None
    """

    def start(self, total_items: int | None = None) -> None:
        pass

    def add_task(self, item_id: str, description: str) -> Any:
        pass

    def set_task_duration(self, item_id: str, total: int) -> None:
        pass

    def update_progress(self, item_id: str, advance: int | None = None, description: str | None = None) -> None:
        pass

    def end_task(self, item_id: str, success: bool, description: str | None = None) -> None:
        pass

    def stop(self) -> None:
        pass
