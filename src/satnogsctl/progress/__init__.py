"""Progress reporting implementations for catalog walks and payload downloads.

This package provides progress reporters fed by the event bus:
- EmptyProgressReporter: No-op reporter for silent operation
- SimpleProgressReporter: Basic text-based progress output
- RichProgressReporter: Enhanced terminal UI with progress bars

All reporters implement the ProgressReporter interface and can be configured
via the registry system.
"""

from typing import Any

from satnogsctl.progress.base import EmptyProgressReporter, LoggingConfig, ProgressReporter
from satnogsctl.progress.events import get_bus
from satnogsctl.progress.rich import RichProgressReporter
from satnogsctl.progress.simple import SimpleProgressReporter
from satnogsctl.registry import Registry

registry = Registry[ProgressReporter](name="reporter")
registry.register("empty", EmptyProgressReporter)
registry.register("simple", SimpleProgressReporter)
registry.register("rich", RichProgressReporter)

__all__ = [
    "ProgressReporter",
    "EmptyProgressReporter",
    "SimpleProgressReporter",
    "RichProgressReporter",
    "LoggingConfig",
    "create_reporter",
]


def create_reporter(reporter_name: str, **kwargs: Any) -> ProgressReporter:
    """Create a reporter and subscribe it to the current event bus.

    Args:
        reporter_name (str): registered reporter name (empty, simple, rich).

    Returns:
        ProgressReporter: the subscribed reporter instance.
    """
    reporter = registry.create(reporter_name, **kwargs)
    get_bus().subscribe(reporter.handle)
    return reporter
