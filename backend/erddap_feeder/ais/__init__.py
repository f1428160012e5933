"""AIS weather message processing for the ERDDAP feeder.

This module provides:
- Typed station and weather records
- Message identification and field decoding
- Acceptance rules with per-rule MMSI exclusion
- Field publishing and ERDDAP query assembly
- Packet processing
"""

from erddap_feeder.ais.models import (
    MessageIdentifier,
    PublishConfig,
    StationNameTable,
    StationRecord,
    WeatherRecord,
    WeatherReport,
)
from erddap_feeder.ais.decoder import (
    MessageDecodeError,
    MissingRequiredField,
    UnsupportedType,
    decode_message,
    decode_station,
    decode_weather,
    resolve_identifier,
)
from erddap_feeder.ais.acceptance import (
    AcceptanceRule,
    AcceptanceTable,
)
from erddap_feeder.ais.publish import (
    assemble_submission,
    filter_and_rename,
)
from erddap_feeder.ais.config import (
    FeederConfigError,
    FeederContext,
    build_context,
    load_context,
)
from erddap_feeder.ais.processor import (
    PacketProcessor,
    PacketSummary,
)

__all__ = [
    # Models
    "MessageIdentifier",
    "PublishConfig",
    "StationNameTable",
    "StationRecord",
    "WeatherRecord",
    "WeatherReport",
    # Decoding
    "MessageDecodeError",
    "MissingRequiredField",
    "UnsupportedType",
    "decode_message",
    "decode_station",
    "decode_weather",
    "resolve_identifier",
    # Acceptance
    "AcceptanceRule",
    "AcceptanceTable",
    # Publishing
    "assemble_submission",
    "filter_and_rename",
    # Config
    "FeederConfigError",
    "FeederContext",
    "build_context",
    "load_context",
    # Processing
    "PacketProcessor",
    "PacketSummary",
]
