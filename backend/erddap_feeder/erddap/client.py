"""ERDDAP client for inserting rows through the HTTP GET ``.insert`` interface."""

import logging
from typing import Optional, Sequence

import requests
from pydantic import BaseModel, ConfigDict, ValidationError

logger = logging.getLogger(__name__)


class ErddapSubmissionError(Exception):
    """Exception raised when an insert is not accepted by ERDDAP."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(f"[HTTP {status_code}] {message}" if status_code else message)


class ErddapInsertResponse(BaseModel):
    """Body of a successful ERDDAP insert."""

    model_config = ConfigDict(extra="allow")

    status: str
    nRowsReceived: int
    stringTimestamp: str
    numericTimestamp: float


class ErddapClient:
    """Submits query-argument lists to an ERDDAP dataset."""

    def __init__(
        self,
        base_url: str,
        timeout_s: Optional[float] = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Dataset URL, without the ``.insert`` suffix
            timeout_s: Request timeout in seconds; None or 0 waits forever
            session: Optional session shared by every submission; without
                one each submission opens and closes its own, since
                submissions run concurrently on worker threads
        """
        self.base_url = base_url
        self.timeout_s = timeout_s or None
        self.session = session

    @property
    def insert_url(self) -> str:
        return f"{self.base_url}.insert"

    def _get(
        self, session: requests.Session, query_args: Sequence[tuple[str, str]]
    ) -> requests.Response:
        return session.get(self.insert_url, params=list(query_args), timeout=self.timeout_s)

    def submit(self, query_args: Sequence[tuple[str, str]]) -> Optional[ErddapInsertResponse]:
        """Send one row to ERDDAP.

        Args:
            query_args: Ordered query arguments, credential included

        Returns:
            Parsed insert response, or None if the body was not the
            expected JSON

        Raises:
            ErddapSubmissionError: On network errors or non-success status
        """
        try:
            if self.session is not None:
                response = self._get(self.session, query_args)
            else:
                with requests.Session() as session:
                    response = self._get(session, query_args)
        except requests.RequestException as e:
            raise ErddapSubmissionError(f"Request failed: {e}")

        if response.status_code == requests.codes.not_found:
            raise ErddapSubmissionError(
                "URL not found. Please check hostname and path of the ERDDAP URL, "
                "and the published field names.",
                status_code=response.status_code,
            )
        if response.status_code != requests.codes.ok:
            raise ErddapSubmissionError(
                f"Unexpected response: {response.text.strip()[:200]}",
                status_code=response.status_code,
            )

        try:
            result = ErddapInsertResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning(f"Successful submission with unexpected body: {e}")
            return None

        logger.info(
            f"Successful submission: {result.nRowsReceived} row(s) at {result.stringTimestamp}"
        )
        return result

    def close(self) -> None:
        if self.session is not None:
            self.session.close()

    def __repr__(self) -> str:
        return f"<ErddapClient(url={self.insert_url})>"
