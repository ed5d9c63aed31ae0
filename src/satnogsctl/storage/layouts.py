from abc import ABC, abstractmethod
from pathlib import Path

from satnogsctl.model import Observation, Satellite

SIDECAR_EXTENSION = "url"
PAYLOAD_EXTENSION = "raw"


class Layout(ABC):
    """Naming policy mapping an observation to its directory and file names."""

    @abstractmethod
    def directory(self, root: Path, satellite: Satellite, observation: Observation) -> Path: ...

    @abstractmethod
    def stem(self, satellite: Satellite, observation: Observation) -> str: ...

    def sidecar_path(self, root: Path, satellite: Satellite, observation: Observation) -> Path:
        directory = self.directory(root, satellite, observation)
        return directory / f"{self.stem(satellite, observation)}.{SIDECAR_EXTENSION}"

    def payload_path(self, root: Path, satellite: Satellite, observation: Observation, index: int = 0) -> Path:
        """Payload file for the reference at `index`, the first one keeps the plain name."""
        directory = self.directory(root, satellite, observation)
        stem = self.stem(satellite, observation)
        if index == 0:
            return directory / f"{stem}.{PAYLOAD_EXTENSION}"
        return directory / f"{stem}.{index}.{PAYLOAD_EXTENSION}"


class SatelliteLayout(Layout):
    """`<root>/<satellite>/<name>-<satellite>-beacon.{url,raw}`, satellite name lower-cased."""

    def directory(self, root: Path, satellite: Satellite, observation: Observation) -> Path:
        return root / satellite.slug

    def stem(self, satellite: Satellite, observation: Observation) -> str:
        return f"{observation.name}-{satellite.slug}-beacon"


class NoradLayout(Layout):
    """`<root>/<norad_id>/<observation_id>.{url,raw}`"""

    def directory(self, root: Path, satellite: Satellite, observation: Observation) -> Path:
        return root / satellite.norad_id

    def stem(self, satellite: Satellite, observation: Observation) -> str:
        return str(observation.id)


class ObservationLayout(Layout):
    """`<root>/<observation_id>/<observation_id>.{url,raw}`"""

    def directory(self, root: Path, satellite: Satellite, observation: Observation) -> Path:
        return root / str(observation.id)

    def stem(self, satellite: Satellite, observation: Observation) -> str:
        return str(observation.id)
