import logging
from collections.abc import Iterator

import requests
from pydantic import ValidationError

from satnogsctl.auth import Authenticator
from satnogsctl.downloaders import HTTPDownloader
from satnogsctl.errors import DecodeError, TransportError
from satnogsctl.model import ObservationList, Page, Satellite, SearchParams

log = logging.getLogger(__name__)

# fixed catalog filters
STATUS_FILTER = "good"
RESPONSE_FORMAT = "json"


def build_query_url(base_url: str, satellite: Satellite, params: SearchParams) -> str:
    """Build the first catalog URL for a satellite, later pages come from the `Link` header.

    Args:
        base_url (str): observation endpoint.
        satellite (Satellite): target to filter on, by NORAD catalog id.
        params (SearchParams): inclusive date range.

    Returns:
        str: absolute URL with every filter already encoded.
    """
    query = {
        "start": params.start.isoformat(),
        "end": params.end.isoformat(),
        "satellite__norad_cat_id": satellite.norad_id,
        "status": STATUS_FILTER,
        "format": RESPONSE_FORMAT,
    }
    return requests.Request("GET", base_url, params=query).prepare().url


def find_next_url(response: requests.Response) -> str | None:
    """Return the `rel="next"` URI from the `Link` header, None when absent or unparsable."""
    try:
        links = response.links
    except (ValueError, IndexError) as e:
        log.debug("Ignoring malformed Link header %r: %s", response.headers.get("Link"), e)
        return None
    next_link = links.get("next")
    if not next_link or not next_link.get("url"):
        return None
    return next_link["url"]


class CatalogWalker:
    """Follows the catalog pagination cursor, one page at a time."""

    def __init__(self, authenticator: Authenticator, downloader: HTTPDownloader, label: str = "catalog"):
        self.auth = authenticator
        self.downloader = downloader
        self.label = label

    def fetch_page(self, url: str) -> Page:
        """Fetch and decode a single page of observations.

        Args:
            url (str): absolute page URL, either the initial query or a previous cursor.

        Returns:
            Page: decoded records and the next cursor, if any.

        Raises:
            TransportError: on network failure or non-success status.
            DecodeError: when the body does not match the observation schema.
        """
        log.info("%s: Querying API: %s", self.label, url)
        response = self.downloader.request(url, headers=self.auth.auth_headers)
        next_url = find_next_url(response)
        try:
            body = response.content
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Reading {url} failed: {e}", url=url) from e
        try:
            records = ObservationList.validate_json(body)
        except ValidationError as e:
            raise DecodeError(f"Unexpected catalog response from {url}: {e}", url=url) from e
        log.debug("%s: %d observations, next page: %s", self.label, len(records), next_url)
        return Page(records=records, next_url=next_url)

    def walk(self, url: str) -> Iterator[Page]:
        """Yield pages starting from `url` until no next cursor is found."""
        next_url: str | None = url
        while next_url is not None:
            page = self.fetch_page(next_url)
            yield page
            next_url = page.next_url
