from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

# Constants
DEFAULT_API_URL = "https://network.satnogs.org/api/observations/"
DEFAULT_START_DATE = date(2024, 8, 16)


class DemodData(BaseModel):
    """Reference to a single demodulated payload attached to an observation."""

    model_config = ConfigDict(frozen=True)

    payload_demod: str


class Observation(BaseModel):
    """Observation record as returned by the catalog.

    Only the identity, the start time and the payload references are used here,
    every other field of the catalog record is kept as-is in `model_extra`.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int
    start: str | None = None
    demoddata: list[DemodData] = Field(default_factory=list)

    @property
    def name(self) -> str:
        # human readable name, falls back to the numeric id
        return self.start if self.start is not None else str(self.id)

    @property
    def has_artifacts(self) -> bool:
        return len(self.demoddata) > 0

    def __str__(self) -> str:
        return f"Observation(id={self.id}, name={self.name})"


ObservationList = TypeAdapter(list[Observation])


class Page(BaseModel):
    records: list[Observation]
    next_url: str | None = None


class Satellite(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    norad_id: str

    @property
    def slug(self) -> str:
        return self.name.lower()

    def matches(self, selector: str) -> bool:
        return selector.lower() in (self.slug, self.norad_id)


DEFAULT_SATELLITES = [
    Satellite(name="CUAVA-2", norad_id="60527"),
    Satellite(name="WS-1", norad_id="60469"),
]


class SearchParams(BaseModel):
    """Inclusive date range used to filter the catalog."""

    start: date
    end: date

    @model_validator(mode="after")
    def validate_dates(self):
        if self.start > self.end:
            raise ValueError(f"Invalid date range: start ({self.start}) must not be after end ({self.end})")
        return self


class ProgressEventType(Enum):
    TASK_CREATED = "task_created"
    TASK_DURATION = "task_duration"
    TASK_PROGRESS = "task_progress"
    TASK_COMPLETED = "task_completed"
    BATCH_STARTED = "batch_started"
    BATCH_COMPLETED = "batch_completed"


class ProgressEvent(BaseModel):
    type: ProgressEventType
    task_id: str
    data: dict[str, Any]
