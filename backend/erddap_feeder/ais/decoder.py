"""Decoding of AIS-catcher JSON messages into typed records.

Provides:
- Message identifier resolution (type, dac, fid)
- Required and defaulted field decoding
- Table-driven numeric coercion for weather fields
"""

import logging
import math
from dataclasses import fields
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from erddap_feeder.ais.models import (
    MessageIdentifier,
    StationRecord,
    WeatherRecord,
    WeatherReport,
)

logger = logging.getLogger(__name__)

RXTIME_FORMAT = "%Y%m%d%H%M%S"

_MISSING = object()


class MessageDecodeError(Exception):
    """Exception raised when a message cannot be decoded."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(f"[{field}] {message}" if field else message)


class MissingRequiredField(MessageDecodeError):
    """A mandatory field is absent or malformed."""


class UnsupportedType(MessageDecodeError):
    """A field is present but cannot be coerced to its target type."""


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a JSON number
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def coerce_float(value: Any, name: str = "") -> float:
    """Coerce a JSON value to float; only JSON numbers are accepted."""
    if not _is_number(value):
        raise UnsupportedType(
            f"expected a number, got {type(value).__name__}", field=name or None
        )
    return float(value)


def coerce_uint(value: Any, name: str = "") -> int:
    """Coerce a JSON value to an unsigned integer.

    Integers pass through. Finite floats are truncated toward zero, since
    some producers emit floats for integer fields.
    """
    if not _is_number(value):
        raise UnsupportedType(
            f"expected an unsigned integer, got {type(value).__name__}",
            field=name or None,
        )
    if isinstance(value, float):
        if not math.isfinite(value):
            raise UnsupportedType(f"non-finite value {value}", field=name or None)
        value = math.trunc(value)
    if value < 0:
        raise UnsupportedType(f"negative value {value}", field=name or None)
    return int(value)


COERCERS: dict[type, Callable[[Any, str], Any]] = {
    int: coerce_uint,
    float: coerce_float,
}


def _optional_uint(message: Mapping[str, Any], name: str) -> Optional[int]:
    value = message.get(name)
    if not _is_number(value):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    return int(value)


def resolve_identifier(message: Mapping[str, Any]) -> MessageIdentifier:
    """Derive the (type, dac, fid) identifier of a raw message.

    Args:
        message: Raw AIS-catcher message

    Returns:
        MessageIdentifier; dac and fid are None unless present and numeric

    Raises:
        MissingRequiredField: If ``type`` is absent
        UnsupportedType: If ``type`` is not numeric
    """
    if "type" not in message:
        raise MissingRequiredField("message has no type", field="type")

    return MessageIdentifier(
        type=coerce_uint(message["type"], "type"),
        dac=_optional_uint(message, "dac"),
        fid=_optional_uint(message, "fid"),
    )


def decode_required(
    message: Mapping[str, Any],
    name: str,
    coerce: Callable[[Any, str], Any],
) -> Any:
    """Decode a mandatory field, failing if it is absent or mistyped."""
    value = message.get(name, _MISSING)
    if value is _MISSING:
        raise MissingRequiredField("required field is missing", field=name)
    return coerce(value, name)


def decode_defaulted(
    message: Mapping[str, Any],
    name: str,
    coerce: Callable[[Any, str], Any],
    default: Any,
) -> Any:
    """Decode a field, substituting its sentinel default when absent."""
    value = message.get(name, _MISSING)
    if value is _MISSING:
        return default
    return coerce(value, name)


def _decode_optional(
    message: Mapping[str, Any],
    name: str,
    coerce: Callable[[Any, str], Any],
) -> Any:
    return decode_defaulted(message, name, coerce, None)


def parse_rxtime(value: Any) -> datetime:
    """Parse an AIS-catcher ``rxtime`` (YYYYMMDDHHMMSS) as UTC."""
    if not isinstance(value, str):
        raise UnsupportedType(
            f"expected a timestamp string, got {type(value).__name__}",
            field="rxtime",
        )
    # strptime accepts single-digit fields, so enforce the fixed width first
    if len(value) != 14 or not value.isdigit():
        raise MissingRequiredField(
            f"malformed timestamp {value!r}: expected 14 digits", field="rxtime"
        )
    try:
        parsed = datetime.strptime(value, RXTIME_FORMAT)
    except ValueError as e:
        raise MissingRequiredField(f"malformed timestamp {value!r}: {e}", field="rxtime")
    return parsed.replace(tzinfo=timezone.utc)


def decode_station(message: Mapping[str, Any]) -> StationRecord:
    """Decode the station part of a message.

    ``mmsi`` and ``rxtime`` are required; ``lat``, ``lon`` and
    ``signalpower`` are decoded when present.
    """
    return StationRecord(
        mmsi=decode_required(message, "mmsi", coerce_uint),
        rxtime=decode_required(message, "rxtime", lambda v, _: parse_rxtime(v)),
        latitude=_decode_optional(message, "lat", coerce_float),
        longitude=_decode_optional(message, "lon", coerce_float),
        signal_power=_decode_optional(message, "signalpower", coerce_float),
    )


def decode_weather(message: Mapping[str, Any]) -> WeatherRecord:
    """Decode every weather field, defaulting the absent ones."""
    values = {}
    for f in fields(WeatherRecord):
        values[f.name] = decode_defaulted(message, f.name, COERCERS[f.type], f.default)
    return WeatherRecord(**values)


def decode_message(message: Mapping[str, Any]) -> WeatherReport:
    """Decode a message believed to carry weather data.

    Raises:
        MessageDecodeError: If any required field is missing or any
            present field has an incompatible type
    """
    return WeatherReport(
        station=decode_station(message),
        weather=decode_weather(message),
    )
