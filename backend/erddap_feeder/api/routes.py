"""API routes for the ERDDAP feeder.

Receives the packets AIS-catcher POSTs in HTTP mode.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from erddap_feeder.ais.processor import PacketProcessor
from erddap_feeder.api.schemas import AisCatcherPacket, PacketSummaryResponse
from erddap_feeder.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["AIS-catcher"])


def get_packet_processor(request: Request) -> PacketProcessor:
    """Get the processor built at startup."""
    processor = getattr(request.app.state, "processor", None)
    if processor is None:
        raise HTTPException(
            status_code=503,
            detail="Packet processor not initialized",
        )
    return processor


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


@router.post("/aiscatcher", response_model=PacketSummaryResponse)
def receive_packet(
    packet: AisCatcherPacket,
    processor: PacketProcessor = Depends(get_packet_processor),
    settings: Settings = Depends(get_app_settings),
) -> PacketSummaryResponse:
    """Process a packet of AIS-catcher messages.

    Messages are processed in order and each accepted one is sent to ERDDAP
    before the next is looked at. The response always reports success; the
    counts tell what happened to the individual messages.

    Args:
        packet: AIS-catcher JSON packet
        processor: Packet processor
        settings: Application settings

    Returns:
        Summary of message outcomes
    """
    if settings.dump_all_packets:
        logger.info(f"{packet.model_dump()}")

    logger.info(
        f"Processing packet from {packet.stationid} running {packet.receiver.description}"
    )

    summary = processor.process(packet.msgs, source=packet.stationid)

    return PacketSummaryResponse(
        message=f"Processed {summary.submitted} messages",
        **summary.to_dict(),
    )
