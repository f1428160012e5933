"""Publishing of decoded records as ERDDAP query arguments.

Provides:
- Field filtering and renaming of weather records
- Assembly of the ordered query-argument list for an ERDDAP insert
"""

import logging
from typing import Any, Iterable

from erddap_feeder.ais.models import PublishConfig, StationNameTable, StationRecord

logger = logging.getLogger(__name__)


def filter_and_rename(
    record_fields: Iterable[tuple[str, Any]],
    config: PublishConfig,
) -> list[tuple[str, Any]]:
    """Filter fields against the allow-list, then rename the survivors.

    An empty allow-list keeps every field. When two fields are renamed to
    the same name, the output keeps the position of the first and the
    value of the last.

    Args:
        record_fields: Ordered (name, value) pairs
        config: Publish configuration

    Returns:
        Ordered (name, value) pairs ready for submission
    """
    allowed = set(config.allow_list)
    kept = [(name, value) for name, value in record_fields if not allowed or name in allowed]

    out: dict[str, Any] = {}
    for name, value in kept:
        new_name = config.rename_map.get(name, name)
        if new_name in out:
            logger.warning(f"Field '{name}' renamed onto existing field '{new_name}'")
        out[new_name] = value

    return list(out.items())


def format_value(value: Any) -> str:
    """Format a weather value in its natural decimal form."""
    return str(value)


def station_arguments(
    station: StationRecord,
    station_names: StationNameTable,
) -> list[tuple[str, str]]:
    """Build the station block of an ERDDAP insert."""
    args: list[tuple[str, str]] = []

    # ERDDAP expects these keys as lower case
    if station.latitude is not None:
        args.append(("latitude", f"{station.latitude:.3f}"))
    if station.longitude is not None:
        args.append(("longitude", f"{station.longitude:.3f}"))
    args.append(("time", station.time_str))

    if station.signal_power is not None:
        args.append(("Signal_Power", f"{station.signal_power:.3f}"))
    args.append(("Station_ID", station_names.name_for(station.mmsi)))
    args.append(("mmsi", str(station.mmsi)))

    return args


def assemble_submission(
    station: StationRecord,
    weather_fields: Iterable[tuple[str, Any]],
    station_names: StationNameTable,
    author_key: str,
) -> list[tuple[str, str]]:
    """Combine station fields, weather fields and the author credential.

    Args:
        station: Decoded station record
        weather_fields: Filtered and renamed weather pairs
        station_names: MMSI to station name lookup
        author_key: ERDDAP author credential

    Returns:
        Ordered list of string pairs for URL query encoding
    """
    query_args = station_arguments(station, station_names)
    query_args.extend((name, format_value(value)) for name, value in weather_fields)
    query_args.append(("author", author_key))
    return query_args
