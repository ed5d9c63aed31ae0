from typing import Any

from satnogsctl.progress.base import LoggingConfig, ProgressReporter


class RichProgressReporter(ProgressReporter):
    """Live terminal view: one transfer bar per payload, a log line per catalog page."""

    def __init__(self):
        try:
            from rich.progress import (
                BarColumn,
                DownloadColumn,
                Progress,
                TextColumn,
                TransferSpeedColumn,
            )
        except ImportError:
            raise ImportError(
                "rich is not installed, please ensure to install it manually or include the extra `satnogsctl[console]`"
            )

        self.progress = Progress(
            TextColumn("[bold green]{task.description}"),
            BarColumn(bar_width=None),
            DownloadColumn(),
            "•",
            TransferSpeedColumn(),
            transient=True,
        )
        self._active = False
        self._downloads: dict[str, Any] = {}
        self.saved = 0
        self.failed = 0

    @classmethod
    def logging_config(cls) -> LoggingConfig:
        from rich.logging import RichHandler

        return LoggingConfig(format="%(message)s", handlers=[RichHandler(rich_tracebacks=True)])

    def start(self, total_items: int | None = None) -> None:
        self.progress.start()
        self._active = True
        self._downloads = {}
        self.saved = self.failed = 0

    def start_batch(self, batch_id: str, total_items: int, description: str | None = None) -> None:
        if self._active:
            self.progress.console.log(f"[bold]{description or batch_id}[/bold]: {total_items} observations")

    def add_task(self, item_id: str, description: str) -> Any:
        # total stays unknown until the response headers arrive
        task_id = self.progress.add_task(description=description, start=False, total=None)
        self._downloads[item_id] = task_id
        return task_id

    def set_task_duration(self, item_id: str, total: int) -> None:
        task_id = self._downloads.get(item_id)
        if self._active and task_id is not None:
            self.progress.update(task_id, total=total)
            self.progress.start_task(task_id)

    def update_progress(self, item_id: str, advance: int | None = None, description: str | None = None) -> None:
        task_id = self._downloads.get(item_id)
        if self._active and task_id is not None:
            self.progress.update(task_id, advance=advance, description=description)

    def end_task(self, item_id: str, success: bool, description: str | None = None) -> None:
        task_id = self._downloads.pop(item_id, None)
        if not self._active or task_id is None:
            return
        if success:
            self.saved += 1
        else:
            self.failed += 1
            self.progress.console.log(f"[red]✗[/red] {description or item_id}")
        self.progress.remove_task(task_id)

    def stop(self) -> None:
        if self._active:
            self.progress.stop()
            self._active = False
            self._downloads.clear()
