"""satnogsctl: bulk downloader for SatNOGS Network observations.

satnogsctl walks the paginated observation catalog for a set of satellites and
stores the demodulated payloads of every observation on disk, next to a
sidecar file listing the URLs they were fetched from.

The library aims to keep the workflow linear and predictable:
- One authenticated client per satellite, following the catalog's `Link` cursor
- One page fully processed before the next one is requested
- Payloads staged and moved into place per observation
- Any failure stops the run with a descriptive error

Example:
    >>> from datetime import date
    >>> from pathlib import Path
    >>> from satnogsctl.auth import TokenAuthenticator
    >>> from satnogsctl.model import DEFAULT_SATELLITES, SearchParams
    >>> from satnogsctl.runner import run
    >>>
    >>> params = SearchParams(start=date(2024, 8, 16), end=date(2024, 8, 17))
    >>> run(DEFAULT_SATELLITES, params, Path("download"), TokenAuthenticator("my-token"))
"""
