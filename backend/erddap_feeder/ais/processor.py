"""AIS packet processor forwarding weather messages to ERDDAP.

Provides:
- Per-message classification against the acceptance table
- Station exclusion by MMSI
- Decoding, publishing and submission of accepted messages
- Outcome counting per packet
"""

import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Protocol, Sequence

from erddap_feeder.ais.config import FeederContext
from erddap_feeder.ais.decoder import (
    MessageDecodeError,
    decode_station,
    decode_weather,
    resolve_identifier,
)
from erddap_feeder.ais.publish import assemble_submission, filter_and_rename
from erddap_feeder.erddap.client import ErddapSubmissionError

logger = logging.getLogger(__name__)


class Submitter(Protocol):
    """Outbound transport for assembled query arguments."""

    def submit(self, query_args: Sequence[tuple[str, str]]) -> Any:
        ...


@dataclass
class PacketSummary:
    """Outcome counts for one inbound packet."""

    total: int = 0
    submitted: int = 0
    skipped: int = 0
    ignored: int = 0
    errors: int = 0
    failed: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


class PacketProcessor:
    """Processes the messages of AIS-catcher packets one by one."""

    def __init__(self, context: FeederContext, submitter: Submitter):
        """Initialize processor.

        Args:
            context: Read-only feeder configuration
            submitter: Transport receiving one submission per accepted message
        """
        self.context = context
        self.submitter = submitter

    def process_message(self, message: Mapping[str, Any], summary: PacketSummary) -> None:
        """Classify, decode and submit a single message.

        Args:
            message: Raw AIS-catcher message
            summary: Packet summary updated with the outcome
        """
        identifier = resolve_identifier(message)

        rule = self.context.acceptance.lookup(identifier)
        if rule is None:
            logger.debug(f"Skipping message with {identifier}")
            summary.skipped += 1
            return

        station = decode_station(message)
        if self.context.acceptance.is_excluded(rule, station.mmsi):
            logger.info(f"Ignoring message from MMSI {station.mmsi}")
            summary.ignored += 1
            return

        weather = decode_weather(message)
        logger.info(f"{station}")
        logger.info(f"{weather}")

        weather_fields = filter_and_rename(weather.to_fields(), self.context.publish)
        query_args = assemble_submission(
            station,
            weather_fields,
            self.context.station_names,
            self.context.erddap_key,
        )

        summary.submitted += 1
        try:
            self.submitter.submit(query_args)
        except ErddapSubmissionError as e:
            logger.error(f"Submission for MMSI {station.mmsi} failed: {e}")
            summary.failed += 1

    def process(
        self,
        messages: Iterable[Mapping[str, Any]],
        source: Optional[str] = None,
    ) -> PacketSummary:
        """Process all messages of a packet in order.

        A message that fails to decode is logged and counted; the
        remaining messages are still processed.

        Args:
            messages: Raw messages of one packet
            source: Name of the sending receiver, for logging

        Returns:
            PacketSummary with outcome counts
        """
        start_time = datetime.utcnow()
        summary = PacketSummary()

        for message in messages:
            summary.total += 1
            try:
                self.process_message(message, summary)
            except MessageDecodeError as e:
                logger.error(f"Failed to decode message {summary.total} from {source}: {e}")
                summary.errors += 1

        elapsed = (datetime.utcnow() - start_time).total_seconds()
        logger.info(
            f"Processed packet from {source}: total={summary.total} "
            f"submitted={summary.submitted} skipped={summary.skipped} "
            f"ignored={summary.ignored} errors={summary.errors} "
            f"failed={summary.failed} ({elapsed:.3f}s)"
        )
        return summary
