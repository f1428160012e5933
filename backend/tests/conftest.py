"""Shared fixtures for ERDDAP feeder tests."""

from typing import Any, Sequence

import pytest

from erddap_feeder.ais.acceptance import AcceptanceRule, AcceptanceTable
from erddap_feeder.ais.config import FeederContext
from erddap_feeder.ais.models import MessageIdentifier, PublishConfig, StationNameTable

WEATHER_ID = MessageIdentifier(type=8, dac=1, fid=31)


class RecordingSubmitter:
    """Submitter that keeps every submission instead of sending it."""

    def __init__(self, error: Exception | None = None):
        self.submissions: list[list[tuple[str, str]]] = []
        self.error = error

    def submit(self, query_args: Sequence[tuple[str, str]]) -> None:
        self.submissions.append(list(query_args))
        if self.error is not None:
            raise self.error


def make_weather_message(**overrides: Any) -> dict[str, Any]:
    """Build an AIS-catcher type 8 DAC 1 FID 31 message."""
    message: dict[str, Any] = {
        "class": "AIS",
        "device": "AIS-catcher",
        "type": 8,
        "repeat": 0,
        "mmsi": 316001234,
        "dac": 1,
        "fid": 31,
        "rxtime": "20230615120000",
        "lat": 49.1234567,
        "lon": -123.4567891,
        "signalpower": -23.45678,
        "wspeed": 12,
        "wgust": 18,
        "wdir": 270,
        "wgustdir": 275,
        "waveheight": 1.5,
        "waveperiod": 6,
        "pressure": 1013,
        "airtemp": 14.2,
    }
    message.update(overrides)
    return message


@pytest.fixture
def weather_message() -> dict[str, Any]:
    return make_weather_message()


@pytest.fixture
def feeder_context() -> FeederContext:
    return FeederContext(
        erddap_url="https://erddap.example.org/erddap/tabledap/ais_weather",
        erddap_key="author_key",
        acceptance=AcceptanceTable([AcceptanceRule(WEATHER_ID, frozenset({111}))]),
        publish=PublishConfig(
            allow_list=("wspeed", "wgust"),
            rename_map={"wspeed": "Wind_Speed", "wgust": "Wind_Gust_Speed"},
        ),
        station_names=StationNameTable({"316001234": "Example Light Station"}),
    )


@pytest.fixture
def submitter() -> RecordingSubmitter:
    return RecordingSubmitter()
