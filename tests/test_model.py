"""Unit tests for the catalog data model."""

from datetime import date

import pytest
from pydantic import ValidationError

from conftest import observation
from satnogsctl.model import ObservationList, Observation, Satellite, SearchParams


class TestObservation:
    def test_name_uses_start_when_present(self):
        obs = Observation.model_validate(observation(12345, start="2024-08-16T03:00:00Z"))
        assert obs.name == "2024-08-16T03:00:00Z"

    def test_name_falls_back_to_id(self):
        obs = Observation.model_validate(observation(12345))
        assert obs.name == "12345"

    def test_has_artifacts(self):
        assert not Observation.model_validate(observation(1)).has_artifacts
        assert Observation.model_validate(observation(1, payloads=["https://x/1"])).has_artifacts

    def test_unused_fields_are_kept(self):
        obs = Observation.model_validate(observation(1, tle0="CUAVA-2"))
        assert obs.model_extra["ground_station"] == 42
        assert obs.model_extra["tle0"] == "CUAVA-2"

    def test_payload_order_is_preserved(self):
        obs = Observation.model_validate(observation(1, payloads=["https://x/a", "https://x/b", "https://x/c"]))
        assert [d.payload_demod for d in obs.demoddata] == ["https://x/a", "https://x/b", "https://x/c"]

    def test_observation_is_immutable(self):
        obs = Observation.model_validate(observation(1))
        with pytest.raises(ValidationError):
            obs.id = 2

    def test_list_rejects_missing_id(self):
        with pytest.raises(ValidationError):
            ObservationList.validate_json(b'[{"start": null, "demoddata": []}]')


class TestSatellite:
    def test_slug_is_lowercase(self):
        assert Satellite(name="CUAVA-2", norad_id="60527").slug == "cuava-2"

    @pytest.mark.parametrize("selector", ["CUAVA-2", "cuava-2", "60527"])
    def test_matches_name_or_norad_id(self, selector):
        assert Satellite(name="CUAVA-2", norad_id="60527").matches(selector)

    def test_does_not_match_other(self):
        assert not Satellite(name="CUAVA-2", norad_id="60527").matches("WS-1")


class TestSearchParams:
    def test_same_day_is_valid(self):
        params = SearchParams(start=date(2024, 8, 16), end=date(2024, 8, 16))
        assert params.start == params.end

    def test_start_after_end_is_rejected(self):
        with pytest.raises(ValidationError, match="Invalid date range"):
            SearchParams(start=date(2024, 8, 17), end=date(2024, 8, 16))
