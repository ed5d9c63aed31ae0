import logging

from satnogsctl.progress.base import ProgressReporter


class SimpleProgressReporter(ProgressReporter):
    """Plain log lines for each catalog page and each finished payload."""

    def __init__(self):
        self.log = logging.getLogger(__name__)
        self.pages = 0
        self.total_items = 0
        self.completed = 0
        self.failed = 0

    def start(self, total_items: int | None = None) -> None:
        self.pages = 0
        self.total_items = total_items or 0
        self.completed = self.failed = 0

    def start_batch(self, batch_id: str, total_items: int, description: str | None = None) -> None:
        self.pages += 1
        self.total_items += total_items
        self.log.info("%s: page %d with %d observations", description or batch_id, self.pages, total_items)

    def add_task(self, item_id: str, description: str) -> str:
        self.log.debug("Fetching %s (%s)", description, item_id)
        return item_id

    def set_task_duration(self, item_id: str, total: int) -> None:
        pass

    def update_progress(self, item_id: str, advance: int | None = None, description: str | None = None) -> None:
        pass

    def end_task(self, item_id: str, success: bool, description: str | None = None) -> None:
        if success:
            self.completed += 1
            self.log.info("Saved %s", description or item_id)
        else:
            self.failed += 1
            self.log.warning("Could not fetch %s", description or item_id)

    def stop(self) -> None:
        self.log.info(
            "Done: %d pages, %d observations, %d payloads saved, %d failed",
            self.pages,
            self.total_items,
            self.completed,
            self.failed,
        )
