"""Downloader implementations for payload retrieval.

This package provides downloader implementations used by satnogsctl:
- HTTPDownloader: Plain HTTP/HTTPS downloads with streaming and progress tracking

All downloaders implement the Downloader interface. Any failure is raised to
the caller, nothing is retried.
"""

from typing import Any

from satnogsctl.auth import Authenticator
from satnogsctl.downloaders.base import Downloader
from satnogsctl.downloaders.http import HTTPDownloader


def create_downloader(authenticator: Authenticator | None = None, **kwargs: Any) -> HTTPDownloader:
    """Create an HTTP downloader from the `download` configuration section.

    Args:
        authenticator (Authenticator | None): Authenticator for payload requests, if any
        kwargs (Any): Downloader options (chunk_size, timeout, pool sizes)

    Returns:
        HTTPDownloader instance, not yet initialized
    """
    return HTTPDownloader(authenticator=authenticator, **kwargs)


__all__ = [
    "Downloader",
    "HTTPDownloader",
    "create_downloader",
]
