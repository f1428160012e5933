"""Pydantic schemas for the AIS-catcher HTTP interface.

Defines the packet AIS-catcher POSTs in HTTP mode and the summary
returned for it.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class AisCatcherReceiver(BaseModel):
    """Data about the AIS-catcher receiver."""

    model_config = ConfigDict(extra="allow")

    description: str = Field(..., description="Description reported by AIS-catcher")
    version: Optional[int] = Field(None, description="AIS-catcher version")
    engine: Optional[str] = Field(None, description="Decoding engine name")
    setting: Optional[str] = None


class AisCatcherDevice(BaseModel):
    """Data about the radio device feeding AIS-catcher."""

    model_config = ConfigDict(extra="allow")

    product: Optional[str] = None
    vendor: Optional[str] = None
    serial: Optional[str] = None
    setting: Optional[str] = None


class AisCatcherPacket(BaseModel):
    """Messages received by AIS-catcher and decoded to JSON.

    Example:
        {
            "protocol": "jsonaiscatcher",
            "encodetime": "20230615120001",
            "stationid": "harbour-rx",
            "receiver": {"description": "AIS-catcher v0.45", "version": 45},
            "device": {"product": "RTL2838UHIDIR"},
            "msgs": [{"type": 8, "dac": 1, "fid": 31, "mmsi": 316001234, ...}]
        }
    """

    model_config = ConfigDict(extra="allow")

    protocol: Optional[str] = None
    encodetime: Optional[str] = None
    # Name AIS-catcher identifies itself with, not the broadcasting station
    stationid: str = Field(..., description="AIS-catcher station name")
    receiver: AisCatcherReceiver
    device: AisCatcherDevice = Field(default_factory=AisCatcherDevice)
    msgs: list[dict[str, Any]] = Field(default_factory=list)


class PacketSummaryResponse(BaseModel):
    """Outcome of processing one packet."""

    message: str
    total: int
    submitted: int
    skipped: int
    ignored: int
    errors: int
    failed: int
