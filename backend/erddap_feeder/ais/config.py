"""Feeder configuration management.

Handles loading the feeder configuration from a YAML file, validating it,
and building the immutable context shared by every packet.
"""

import logging
import os
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from erddap_feeder.ais.acceptance import AcceptanceRule, AcceptanceTable
from erddap_feeder.ais.models import PublishConfig, StationNameTable

logger = logging.getLogger(__name__)

DEFAULT_MMSI = "00000"
DEFAULT_URL = "https://erddap.example.com/erddap/tabledap/data_set"
DEFAULT_KEY = "username_password"


class ConfigExit(IntEnum):
    """Process exit codes for configuration failures."""

    COULD_NOT_LOAD_CONFIG_FILE = 1
    COULD_NOT_CREATE_CONFIG_FILE = 2
    COULD_NOT_GET_CONFIG_FILE_PATH = 3
    EMPTY_MMSI_LOOKUP = 4
    DEFAULT_MMSI_LOOKUP = 5
    DEFAULT_ERDDAP_URL = 6
    DEFAULT_ERDDAP_KEY = 7


class FeederConfigError(Exception):
    """Exception raised when feeder configuration loading fails."""

    def __init__(self, message: str, exit_code: ConfigExit):
        self.exit_code = exit_code
        super().__init__(message)


class AcceptEntry(BaseModel):
    """One accepted message identifier."""

    model_config = ConfigDict(extra="forbid")

    type: int = Field(ge=0)
    dac: Optional[int] = Field(None, ge=0)
    fid: Optional[int] = Field(None, ge=0)
    ignore_mmsi: list[int] = Field(default_factory=list)


class RenameEntry(BaseModel):
    """Rename of one published field."""

    model_config = ConfigDict(populate_by_name=True)

    from_name: str = Field(alias="from", min_length=1)
    to_name: str = Field(alias="to", min_length=1)


class MMSILookupEntry(BaseModel):
    """Mapping of an MMSI to a station name."""

    mmsi: str
    station_id: str


class FeederConfigFile(BaseModel):
    """Schema of the feeder YAML configuration file."""

    erddap_url: str = DEFAULT_URL
    erddap_key: str = DEFAULT_KEY
    accept: list[AcceptEntry] = Field(
        default_factory=lambda: [AcceptEntry(type=8, dac=1, fid=31)]
    )
    publish_fields: list[str] = Field(default_factory=list)
    rename_fields: list[RenameEntry] = Field(default_factory=list)
    mmsi_lookup: list[MMSILookupEntry] = Field(default_factory=list)


# Written out when no configuration file exists yet
DEFAULT_CONFIG: dict[str, Any] = {
    "erddap_url": DEFAULT_URL,
    "erddap_key": DEFAULT_KEY,
    "accept": [
        {"type": 8, "dac": 1, "fid": 31, "ignore_mmsi": []},
    ],
    "publish_fields": [
        "wspeed",
        "wgust",
        "wdir",
        "wgustdir",
        "waveheight",
        "waveperiod",
    ],
    "rename_fields": [
        {"from": "wspeed", "to": "Wind_Speed"},
        {"from": "wgust", "to": "Wind_Gust_Speed"},
        {"from": "wdir", "to": "Wind_Direction"},
        {"from": "wgustdir", "to": "Wind_Gust_Direction"},
        {"from": "waveheight", "to": "Wave_Height"},
        {"from": "waveperiod", "to": "Wave_Period"},
    ],
    "mmsi_lookup": [
        {"mmsi": DEFAULT_MMSI, "station_id": "MMSI Name"},
    ],
}


@dataclass(frozen=True)
class FeederContext:
    """Read-only configuration shared by all packet processing."""

    erddap_url: str
    erddap_key: str
    acceptance: AcceptanceTable
    publish: PublishConfig
    station_names: StationNameTable


def _substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in string values.

    Supports ${VAR_NAME} syntax.
    """
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        env_var = value[2:-1]
        return os.getenv(env_var, "")
    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_substitute_env_vars(v) for v in value]
    return value


def resolve_config_path(config_file: Optional[str]) -> Path:
    """Resolve the configuration file path.

    Raises:
        FeederConfigError: If no path is configured
    """
    if not config_file:
        raise FeederConfigError(
            "Could not get configuration file name",
            ConfigExit.COULD_NOT_GET_CONFIG_FILE_PATH,
        )
    return Path(config_file).expanduser()


def create_config(config_path: Path) -> None:
    """Write a default configuration file for the user to edit."""
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            yaml.safe_dump(DEFAULT_CONFIG, f, sort_keys=False)
    except OSError as e:
        logger.error(f"Could not create configuration file {config_path}: {e}")
        raise FeederConfigError(
            f"Could not create configuration file {config_path}: {e}",
            ConfigExit.COULD_NOT_CREATE_CONFIG_FILE,
        )
    logger.info(
        "Wrote initial configuration file. "
        "Please edit it and adjust the mmsi_lookup entries."
    )


def load_config_file(config_path: Path) -> FeederConfigFile:
    """Load and validate a configuration file.

    A missing file is treated as an empty one.

    Raises:
        FeederConfigError: If the file cannot be read or parsed
    """
    raw: Any = {}
    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Could not load configuration file {config_path}: {e}")
            raise FeederConfigError(
                f"Could not load configuration file {config_path}: {e}",
                ConfigExit.COULD_NOT_LOAD_CONFIG_FILE,
            )

    if not isinstance(raw, dict):
        raise FeederConfigError(
            f"Configuration file {config_path} must contain a mapping",
            ConfigExit.COULD_NOT_LOAD_CONFIG_FILE,
        )

    try:
        return FeederConfigFile.model_validate(_substitute_env_vars(raw))
    except ValidationError as e:
        logger.error(f"Invalid configuration file {config_path}: {e}")
        raise FeederConfigError(
            f"Invalid configuration file {config_path}: {e}",
            ConfigExit.COULD_NOT_LOAD_CONFIG_FILE,
        )


def validate_config(config: FeederConfigFile, config_path: Path) -> None:
    """Reject configurations that still carry placeholder values.

    An empty MMSI lookup writes a default file when none exists yet;
    an existing file is never overwritten.

    Raises:
        FeederConfigError: With the matching exit code
    """
    if not config.mmsi_lookup:
        logger.error(
            f"The configuration file {config_path} does not have any MMSI lookups defined."
        )
        if not config_path.exists():
            create_config(config_path)
        raise FeederConfigError(
            f"The configuration file {config_path} does not have any MMSI lookups defined",
            ConfigExit.EMPTY_MMSI_LOOKUP,
        )

    for lookup in config.mmsi_lookup:
        if lookup.mmsi == DEFAULT_MMSI:
            raise FeederConfigError(
                f"The configuration file {config_path} has the default MMSI lookup. "
                f"Please edit the file.",
                ConfigExit.DEFAULT_MMSI_LOOKUP,
            )

    if config.erddap_url == DEFAULT_URL:
        raise FeederConfigError(
            f"The configuration file {config_path} has the default ERDDAP URL. "
            f"Please edit the file.",
            ConfigExit.DEFAULT_ERDDAP_URL,
        )

    if config.erddap_key == DEFAULT_KEY:
        raise FeederConfigError(
            f"The configuration file {config_path} has the default ERDDAP key. "
            f"Please edit the file.",
            ConfigExit.DEFAULT_ERDDAP_KEY,
        )


def build_context(config: FeederConfigFile) -> FeederContext:
    """Build the immutable feeder context from a validated configuration."""
    acceptance = AcceptanceTable(
        AcceptanceRule.from_dict(entry.model_dump()) for entry in config.accept
    )

    rename_map: dict[str, str] = {}
    for entry in config.rename_fields:
        rename_map[entry.from_name] = entry.to_name

    # Convert the list of lookups to a map for rapid lookups
    names: dict[str, str] = {}
    for entry in config.mmsi_lookup:
        names[entry.mmsi] = entry.station_id
        logger.info(f"Mapped MMSI '{entry.mmsi}' to '{entry.station_id}'")

    return FeederContext(
        erddap_url=config.erddap_url,
        erddap_key=config.erddap_key,
        acceptance=acceptance,
        publish=PublishConfig(
            allow_list=tuple(config.publish_fields),
            rename_map=rename_map,
        ),
        station_names=StationNameTable(names),
    )


def load_context(config_file: Optional[str]) -> FeederContext:
    """Load, validate and build the feeder context.

    Args:
        config_file: Path to the YAML configuration file

    Returns:
        FeederContext for the lifetime of the process

    Raises:
        FeederConfigError: If configuration loading or validation fails
    """
    config_path = resolve_config_path(config_file)
    logger.info(f"Loading feeder configuration from: {config_path}")

    config = load_config_file(config_path)
    validate_config(config, config_path)
    context = build_context(config)

    logger.info(f"ERDDAP URL: {context.erddap_url}")
    logger.info(f"Accepting {len(context.acceptance)} message identifier(s)")
    return context
