import logging
from pathlib import Path

import requests
from requests.adapters import HTTPAdapter

from satnogsctl.auth import Authenticator
from satnogsctl.downloaders.base import Downloader
from satnogsctl.errors import StorageError, TransportError
from satnogsctl.model import ProgressEventType
from satnogsctl.progress.events import emit_event

log = logging.getLogger(__name__)

CHUNK_SIZE = 8192
# catalog and payload hosts are each reached over a handful of keep-alive connections
POOL_CONNECTIONS = 10
POOL_MAXSIZE = 2


class HTTPDownloader(Downloader):
    """Session-backed GET client shared by the catalog walk and the payload fetches.

    Nothing is retried: a connection problem, a non-success status or a broken
    body stream surfaces as `TransportError`, a local write problem as `StorageError`.
    """

    def __init__(
        self,
        authenticator: Authenticator | None = None,
        chunk_size: int = CHUNK_SIZE,
        timeout: float | None = None,
        pool_connections: int = POOL_CONNECTIONS,
        pool_maxsize: int = POOL_MAXSIZE,
    ):
        super().__init__(authenticator)
        self.chunk_size = chunk_size
        self.timeout = timeout
        self.pool_connections = pool_connections
        self.pool_maxsize = pool_maxsize
        self.session: requests.Session | None = None

    def init(self, session: requests.Session | None = None, **kwargs) -> None:
        if session is not None:
            self.session = session
        elif self.session is None:
            self.session = self._new_session()

    def _new_session(self) -> requests.Session:
        session = requests.Session()
        adapter = HTTPAdapter(pool_connections=self.pool_connections, pool_maxsize=self.pool_maxsize)
        for prefix in ("https://", "http://"):
            session.mount(prefix, adapter)
        return session

    def __enter__(self) -> "HTTPDownloader":
        self.init()
        return self

    def request(self, url: str, headers: dict[str, str] | None = None, stream: bool = False) -> requests.Response:
        """GET `url`, returning the response only when its status is a success."""
        if self.session is None:
            self.init()
        try:
            response = self.session.get(url, headers=headers, stream=stream, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"GET {url} failed: {e}", url=url) from e
        if not response.ok:
            status = response.status_code
            response.close()
            raise TransportError(f"GET {url} returned {status} {response.reason}", url=url, status_code=status)
        return response

    def download(self, uri: str, destination: Path, item_id: str, description: str = "download") -> int:
        task_id = f"download_{item_id}"
        headers = self.auth.auth_headers if self.auth else None

        log.debug("Fetching %s into %s", uri, destination)
        emit_event(ProgressEventType.TASK_CREATED, task_id=task_id, description=description)
        try:
            with self.request(uri, headers=headers, stream=True) as response:
                size = self._stream_to(response, destination, task_id)
        except (TransportError, StorageError) as e:
            emit_event(ProgressEventType.TASK_COMPLETED, task_id=task_id, success=False, description=str(e))
            raise

        log.debug("Wrote %d bytes from %s", size, uri)
        emit_event(ProgressEventType.TASK_COMPLETED, task_id=task_id, success=True, description=description)
        return size

    def _stream_to(self, response: requests.Response, destination: Path, task_id: str) -> int:
        content_length = response.headers.get("Content-Length")
        if content_length and content_length.isdigit():
            emit_event(ProgressEventType.TASK_DURATION, task_id=task_id, duration=int(content_length))

        written = 0
        try:
            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=self.chunk_size):
                    if not chunk:
                        continue
                    f.write(chunk)
                    written += len(chunk)
                    emit_event(ProgressEventType.TASK_PROGRESS, task_id=task_id, advance=len(chunk))
        except OSError as e:
            raise StorageError(f"Unable to write {destination}: {e}", path=destination) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Reading {response.url} failed: {e}", url=response.url) from e
        return written

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None
