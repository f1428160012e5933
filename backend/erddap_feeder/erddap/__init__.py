"""ERDDAP archival service client."""

from erddap_feeder.erddap.client import (
    ErddapClient,
    ErddapInsertResponse,
    ErddapSubmissionError,
)

__all__ = [
    "ErddapClient",
    "ErddapInsertResponse",
    "ErddapSubmissionError",
]
