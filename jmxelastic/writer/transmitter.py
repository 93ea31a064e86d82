"""Envío del payload _bulk a Elasticsearch."""

from __future__ import annotations

import logging

import requests

from .errors import TransmissionError

logger = logging.getLogger(__name__)

BULK_ENDPOINT = "/_bulk"
BULK_HEADERS = {"Content-Type": "application/x-ndjson"}


class BulkTransmitter:
    """Issue one blocking POST per drained payload and classify the answer.

    No retry and no timeout are applied here; wrap the transmitter when a
    deployment needs either.
    """

    def __init__(self, connection_url: str, session: requests.Session) -> None:
        self.connection_url = connection_url
        self.bulk_url = f"{connection_url.rstrip('/')}{BULK_ENDPOINT}"
        self.session = session

    def send(self, payload: str) -> None:
        logger.debug("Post entity: %s", payload)
        try:
            response = self.session.post(self.bulk_url, headers=BULK_HEADERS, data=payload.encode("utf-8"))
        except requests.RequestException as exc:
            reason = f"{type(exc).__name__}: {exc}"
            raise TransmissionError(f"Bulk request to {self.bulk_url} failed ({reason})") from exc

        status_code = response.status_code
        body = response.text or ""
        logger.debug("Status code from elasticsearch: %s", status_code)
        if body:
            logger.debug("Status message from elasticsearch: %s", self._truncate(body))

        # Per-item failures reported inside a 200 response are not inspected.
        if status_code != 200:
            message = body if body else f"Elasticsearch status code was: {status_code}"
            raise TransmissionError(message, status_code=status_code, body=body or None)

    @staticmethod
    def _truncate(body: str, limit: int = 512) -> str:
        if len(body) <= limit:
            return body
        return f"{body[:limit]}... [truncated {len(body) - limit} chars]"
