from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from satnogsctl.auth import Authenticator


class Downloader(ABC):
    """
    Fetches remote resources for one satellite walk.

    A downloader owns its connection pool between `init` and `close`; used as a
    context manager it is opened on entry and released on exit, even when the
    walk fails half way.
    """

    def __init__(self, authenticator: Authenticator | None = None) -> None:
        super().__init__()
        # payload hosts are public, the authenticator is only set when needed
        self.auth = authenticator

    @abstractmethod
    def init(self, **kwargs: Any) -> None: ...

    @abstractmethod
    def download(self, uri: str, destination: Path, item_id: str, description: str = "download") -> int:
        """Write the body behind `uri` to `destination`, replacing it.

        Args:
            uri (str): resource to fetch.
            destination (Path): file to write, its parent must exist.
            item_id (str): identifier used in progress events.
            description (str): label shown by progress reporters.

        Returns:
            int: number of bytes written.
        """
        ...

    @abstractmethod
    def close(self) -> None: ...

    def __enter__(self) -> "Downloader":
        self.init()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
