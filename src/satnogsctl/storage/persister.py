import logging
import os
from pathlib import Path
from typing import Literal

from satnogsctl.downloaders import Downloader
from satnogsctl.errors import StorageError
from satnogsctl.model import Observation, Satellite
from satnogsctl.storage.layouts import Layout
from satnogsctl.utils import backup_path, quote_url, staging_path

log = logging.getLogger(__name__)

MultiPayloadPolicy = Literal["overwrite", "indexed"]


class ArtifactPersister:
    """Downloads the payloads of an observation and stores them with a URL sidecar.

    Files are staged under hidden names inside the destination directory and
    moved into place only once every payload of the observation is on disk.
    Files from a previous run are set aside while the new ones are moved in.
    If a move fails, the new files are removed and the previous versions put
    back, so an observation is either fully written or left as it was.
    """

    def __init__(
        self,
        downloader: Downloader,
        layout: Layout,
        multi_payload: MultiPayloadPolicy = "overwrite",
    ):
        self.downloader = downloader
        self.layout = layout
        self.multi_payload = multi_payload

    def persist(self, record: Observation, satellite: Satellite, destination: Path) -> list[Path]:
        """Store every payload referenced by `record` under `destination`.

        Args:
            record (Observation): observation to store, skipped when it has no payloads.
            satellite (Satellite): target the observation belongs to, used for naming.
            destination (Path): root download directory.

        Returns:
            list[Path]: final paths written, sidecar first; empty when skipped.

        Raises:
            TransportError: if a payload cannot be fetched.
            StorageError: if a directory or file cannot be created, written or moved.
        """
        if not record.has_artifacts:
            log.debug("Skipping %s, no payloads", record)
            return []

        directory = self.layout.directory(destination, satellite, record)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Unable to create folder {directory}: {e}", path=directory) from e

        if len(record.demoddata) > 1 and self.multi_payload == "overwrite":
            discarded = [ref.payload_demod for ref in record.demoddata[:-1]]
            log.warning(
                "%s has %d payloads, keeping only the last one on disk (use the indexed policy to keep all), discarded: %s",
                record,
                len(record.demoddata),
                ", ".join(discarded),
            )

        sidecar = self.layout.sidecar_path(destination, satellite, record)
        staged: dict[Path, Path] = {sidecar: staging_path(sidecar)}
        try:
            self._stage(record, satellite, destination, staged[sidecar], staged)
            return self._commit(staged)
        finally:
            self._discard(staged.values())

    def _stage(
        self,
        record: Observation,
        satellite: Satellite,
        destination: Path,
        sidecar_staging: Path,
        staged: dict[Path, Path],
    ) -> None:
        try:
            sidecar_file = open(sidecar_staging, "w", encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Unable to open {sidecar_staging}: {e}", path=sidecar_staging) from e

        with sidecar_file:
            for index, reference in enumerate(record.demoddata):
                url = reference.payload_demod
                try:
                    sidecar_file.write(f"{quote_url(url)}\n")
                except OSError as e:
                    raise StorageError(f"Unable to write {sidecar_staging}: {e}", path=sidecar_staging) from e

                slot = index if self.multi_payload == "indexed" else 0
                target = self.layout.payload_path(destination, satellite, record, slot)
                target_staging = staged.setdefault(target, staging_path(target))
                self.downloader.download(url, target_staging, item_id=f"{record.id}_{index}", description=record.name)

    def _commit(self, staged: dict[Path, Path]) -> list[Path]:
        # (final, previous version set aside or None), in commit order
        committed: list[tuple[Path, Path | None]] = []
        try:
            for final, staging in staged.items():
                previous = self._set_aside(final)
                committed.append((final, previous))
                os.replace(staging, final)
        except OSError as e:
            self._rollback(committed)
            raise StorageError(f"Unable to move {staging} to {final}: {e}", path=final) from e
        except BaseException:
            self._rollback(committed)
            raise

        self._discard(previous for _, previous in committed if previous is not None)
        return [final for final, _ in committed]

    def _set_aside(self, final: Path) -> Path | None:
        if not final.exists():
            return None
        previous = backup_path(final)
        os.replace(final, previous)
        return previous

    def _rollback(self, committed: list[tuple[Path, Path | None]]) -> None:
        for final, previous in reversed(committed):
            log.debug("Rolling back %s", final)
            try:
                if previous is not None:
                    os.replace(previous, final)
                else:
                    final.unlink(missing_ok=True)
            except OSError as e:
                log.warning("Unable to restore %s during rollback: %s", final, e)

    def _discard(self, paths) -> None:
        for path in paths:
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                log.warning("Unable to remove leftover %s: %s", path, e)
