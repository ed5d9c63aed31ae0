import json
import logging
from pathlib import Path

from satnogsctl.progress import ProgressReporter


def setup_logging(
    log_level: str,
    reporter_cls: type[ProgressReporter] | None = None,
    suppressions: dict[str, list[str]] | None = None,
) -> None:
    """Route log records through the handlers of the selected reporter.

    Args:
        log_level (str): root level name, e.g. DEBUG or INFO.
        reporter_cls (type[ProgressReporter] | None): reporter whose handlers and format are used.
        suppressions (dict[str, list[str]] | None): level name -> noisy loggers to raise to that level.
    """
    config = (reporter_cls or ProgressReporter).logging_config()
    # the CLI may run several times in one process, replace previous handlers
    logging.basicConfig(level=log_level.upper(), format=config.format, handlers=config.handlers, force=True)
    for level_name, logger_names in (suppressions or {}).items():
        level = logging.getLevelName(level_name.upper())
        for name in logger_names:
            logging.getLogger(name).setLevel(level)


def quote_url(url: str) -> str:
    """Return the URL double-quoted with backslash escapes, as written in sidecar files."""
    return json.dumps(url, ensure_ascii=False)


def staging_path(path: Path) -> Path:
    """Hidden sibling used while a file is being written."""
    return path.with_name(f".{path.name}.part")


def backup_path(path: Path) -> Path:
    """Hidden sibling holding the previous version of a file while it is replaced."""
    return path.with_name(f".{path.name}.prev")
