"""Local storage of observation payloads.

This package provides:
- Layout implementations deciding where each observation is stored
  (satellite, norad, observation)
- ArtifactPersister: downloads payloads and moves them into place

Layouts are configured via the registry system and created with create_layout().
"""

from satnogsctl.registry import Registry
from satnogsctl.storage.layouts import Layout, NoradLayout, ObservationLayout, SatelliteLayout
from satnogsctl.storage.persister import ArtifactPersister, MultiPayloadPolicy

registry = Registry[Layout](name="layout")
registry.register("satellite", SatelliteLayout)
registry.register("norad", NoradLayout)
registry.register("observation", ObservationLayout)


def create_layout(layout_name: str) -> Layout:
    return registry.create(layout_name)


__all__ = [
    "Layout",
    "SatelliteLayout",
    "NoradLayout",
    "ObservationLayout",
    "ArtifactPersister",
    "MultiPayloadPolicy",
    "create_layout",
]
