"""Internal AIS weather data representation models.

Typed records decoded from AIS-catcher JSON messages, plus the small
read-only lookup types used while publishing them.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional

UNKNOWN_STATION = "UNKNOWN"


@dataclass(frozen=True)
class MessageIdentifier:
    """Structural identity of an AIS message: (type, dac, fid).

    ``dac`` and ``fid`` are None when the message does not carry them,
    and None never equals a concrete value.
    """

    type: int
    dac: Optional[int] = None
    fid: Optional[int] = None

    def __str__(self) -> str:
        return f"type={self.type} dac={self.dac} fid={self.fid}"


@dataclass
class StationRecord:
    """Identity and reception data of the broadcasting station."""

    mmsi: int
    rxtime: datetime  # UTC
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    signal_power: Optional[float] = None

    @property
    def time_str(self) -> str:
        """Reception time as ISO 8601 UTC with second precision."""
        return self.rxtime.strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass
class WeatherRecord:
    """IMO289 meteorological and hydrographic payload (DAC 1, FID 31).

    Every default is the "not available" value of the broadcast encoding,
    substituted when AIS-catcher omits the field.
    """

    airtemp: float = -102.4  # deg C
    cdepth2: int = 31  # m
    cdepth3: int = 31  # m
    cdir: int = 360  # deg
    cdir2: int = 360  # deg
    cdir3: int = 360  # deg
    cspeed: float = 25.5  # knots
    cspeed2: float = 25.5  # knots
    cspeed3: float = 25.5  # knots
    dewpoint: float = 50.1  # deg C
    humidity: int = 101  # %
    ice: int = 3
    leveltrend: int = 3
    preciptype: int = 7
    pressure: int = 511  # hPa
    pressuretend: int = 3
    salinity: float = 51.0  # per mille
    seastate: int = 13  # Beaufort
    swelldir: int = 360  # deg
    swellheight: float = 25.5  # m
    swellperiod: int = 63  # s
    visgreater: int = 0
    visibility: float = 12.7  # NM
    wavedir: int = 360  # deg
    waveheight: float = 25.5  # m
    waveperiod: int = 63  # s
    waterlevel: float = 30.01  # m
    watertemp: float = 50.1  # deg C
    wdir: int = 360  # deg
    wgust: int = 127  # knots
    wgustdir: int = 360  # deg
    wspeed: int = 127  # knots

    def to_fields(self) -> list[tuple[str, Any]]:
        """Return (name, value) pairs sorted by field name."""
        return sorted((f.name, getattr(self, f.name)) for f in fields(self))


@dataclass
class WeatherReport:
    """A fully decoded weather message."""

    station: StationRecord
    weather: WeatherRecord


@dataclass(frozen=True)
class PublishConfig:
    """Which weather fields to publish, and under which names.

    An empty allow_list publishes every field.
    """

    allow_list: tuple[str, ...] = ()
    rename_map: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "allow_list", tuple(self.allow_list))
        object.__setattr__(self, "rename_map", MappingProxyType(dict(self.rename_map)))


class StationNameTable:
    """Read-only MMSI to station name lookup."""

    def __init__(self, names: Optional[Mapping[str, str]] = None):
        self._names = MappingProxyType(dict(names or {}))

    def name_for(self, mmsi: int) -> str:
        return self._names.get(str(mmsi), UNKNOWN_STATION)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, mmsi: object) -> bool:
        return str(mmsi) in self._names

    def __repr__(self) -> str:
        return f"<StationNameTable(entries={len(self._names)})>"
