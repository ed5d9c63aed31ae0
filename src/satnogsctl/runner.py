"""Run driver: walks the catalog for each satellite and stores the payloads.

For every satellite the initial query URL is built once, then pages are
fetched one at a time and each eligible observation is persisted before the
next page is requested. Any error stops the run where it happened.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from satnogsctl.auth import Authenticator
from satnogsctl.catalog import CatalogWalker, build_query_url
from satnogsctl.downloaders import HTTPDownloader
from satnogsctl.model import DEFAULT_API_URL, ProgressEventType, Satellite, SearchParams
from satnogsctl.progress.events import emit_event
from satnogsctl.storage import ArtifactPersister, Layout, MultiPayloadPolicy, SatelliteLayout

log = logging.getLogger(__name__)


@dataclass
class RunSummary:
    pages: int = 0
    observations: int = 0
    persisted: int = 0
    files: list[Path] = field(default_factory=list)


def run(
    satellites: list[Satellite],
    params: SearchParams,
    destination: Path,
    authenticator: Authenticator,
    *,
    api_url: str = DEFAULT_API_URL,
    layout: Layout | None = None,
    multi_payload: MultiPayloadPolicy = "overwrite",
    downloader_factory: Callable[[], HTTPDownloader] = HTTPDownloader,
) -> RunSummary:
    """Download every payload of the matching observations, satellite by satellite.

    Args:
        satellites (list[Satellite]): targets to walk, in order.
        params (SearchParams): inclusive date range.
        destination (Path): root download directory.
        authenticator (Authenticator): credentials for the catalog requests.
        api_url (str, optional): observation endpoint.
        layout (Layout | None, optional): naming policy, defaults to the satellite layout.
        multi_payload (MultiPayloadPolicy, optional): what to do with observations holding several payloads.
        downloader_factory (Callable[[], HTTPDownloader], optional): builds one downloader per satellite.

    Returns:
        RunSummary: counters and files written.
    """
    layout = layout or SatelliteLayout()
    summary = RunSummary()

    for satellite in satellites:
        # a fresh client per satellite, the server keeps cursors per connection
        with downloader_factory() as downloader:
            walker = CatalogWalker(authenticator, downloader, label=satellite.name)
            persister = ArtifactPersister(downloader, layout, multi_payload=multi_payload)
            url = build_query_url(api_url, satellite, params)

            for page in walker.walk(url):
                summary.pages += 1
                summary.observations += len(page.records)
                batch_id = f"{satellite.slug}_page_{summary.pages}"
                emit_event(
                    ProgressEventType.BATCH_STARTED,
                    task_id=batch_id,
                    total_items=len(page.records),
                    description=satellite.name,
                )
                persisted = 0
                for record in page.records:
                    if not record.has_artifacts:
                        continue
                    log.info("%s: Downloading observation: %s (%s)", satellite.name, record.name, record.id)
                    summary.files.extend(persister.persist(record, satellite, destination))
                    persisted += 1
                summary.persisted += persisted
                emit_event(
                    ProgressEventType.BATCH_COMPLETED,
                    task_id=batch_id,
                    success_count=persisted,
                    failure_count=0,
                )

    log.info(
        "Run completed: %d pages, %d observations, %d with payloads, %d files written",
        summary.pages,
        summary.observations,
        summary.persisted,
        len(summary.files),
    )
    return summary
