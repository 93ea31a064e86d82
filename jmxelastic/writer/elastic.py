"""Writer que envía las muestras JMX a Elasticsearch mediante la API _bulk."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date
from typing import Callable, Iterable, Optional, Tuple

import requests

from jmxelastic.config.schema import ElasticWriterSettings

from .base import OutputWriter, Sample, Server
from .buffer import BulkBuffer
from .documents import (
    ELASTIC_TYPE_NAME,
    action_header,
    boolean_as_number,
    index_name,
    is_numeric,
    sample_to_document,
)
from .errors import LifecycleError, ValueConversionError
from .transmitter import BulkTransmitter

logger = logging.getLogger(__name__)


class ElasticWriter(OutputWriter):
    """Feed JMX samples directly into Elasticsearch.

    ``add_samples`` may be called from several producer threads; ``flush``
    drains the shared buffer and sends it from the calling thread. The
    buffer lock is never held across the network call, so producers can
    fill the next cycle while a payload is in flight.
    """

    def __init__(
        self,
        settings: ElasticWriterSettings,
        *,
        session_factory: Callable[[], requests.Session] = requests.Session,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.settings = settings
        self.root_prefix = settings.root_prefix
        self.connection_url = settings.connection_url
        self._session_factory = session_factory
        self._today = today
        self._session: Optional[requests.Session] = None
        self._buffer: Optional[BulkBuffer] = None
        self._transmitter: Optional[BulkTransmitter] = None

    # Ciclo de vida ------------------------------------------------------------
    def start(self) -> None:
        try:
            session = self._session_factory()
            session.verify = self.settings.verify_ssl
            if self.settings.username:
                session.auth = (self.settings.username, self.settings.password or "")
            self._transmitter = BulkTransmitter(self.connection_url, session)
            self._buffer = BulkBuffer()
            self._session = session
        except Exception as exc:
            raise LifecycleError("Failed to create elastic http session.") from exc
        logger.info("ElasticWriter started for %s", self._transmitter.bulk_url)

    def close(self) -> None:
        if self._session is None:
            return
        buffer, session = self._buffer, self._session
        self._buffer = None
        self._transmitter = None
        self._session = None
        if buffer is not None and buffer.pending_pairs:
            logger.warning(
                "ElasticWriter closing with %d buffered documents; they will not be sent.",
                buffer.pending_pairs,
            )
        try:
            session.close()
        except Exception as exc:
            raise LifecycleError("Failed to close elastic http session.") from exc

    def validate_setup(self, server: Server) -> None:
        """No validations are performed."""

    # Ciclo de escritura -------------------------------------------------------
    def write(self, server: Server, samples: Iterable[Sample]) -> bool:
        """Buffer one cycle of samples and send them in a single bulk request."""

        self.add_samples(server, samples)
        return self.flush()

    def add_samples(self, server: Server, samples: Iterable[Sample]) -> int:
        """Append the numeric samples to the shared buffer.

        Returns the number of documents buffered. Non-numeric samples are
        skipped with a warning; a sample that fails conversion is logged and
        dropped without aborting the rest of the batch.
        """

        buffer, _ = self._require_started()
        sample_log_level = logging.INFO if self.settings.debug else logging.DEBUG
        added = 0
        for sample in samples:
            logger.log(sample_log_level, "Query result: [%s]", sample)
            if self.settings.boolean_as_number and isinstance(sample.value, bool):
                sample = dataclasses.replace(sample, value=boolean_as_number(sample.value))
            if not is_numeric(sample.value):
                logger.warning(
                    "Unable to submit non-numeric value to Elastic: [%s] from result [%s]",
                    sample.value,
                    sample,
                )
                continue
            try:
                document = sample_to_document(server, sample)
            except ValueConversionError:
                logger.exception("Dropping sample that passed the numeric filter: [%s]", sample)
                continue
            index = index_name(self.root_prefix, self._today())
            logger.debug(
                "Insert into Elastic: Index: [%s] Type: [%s] Map: [%s]",
                index,
                ELASTIC_TYPE_NAME,
                document,
            )
            try:
                buffer.append(action_header(index), document)
            except (TypeError, ValueError):
                logger.exception("Dropping sample that cannot be serialized to JSON: [%s]", sample)
                continue
            added += 1
        return added

    def flush(self) -> bool:
        """Drain the buffer and send it.

        Returns ``False`` when there was nothing to send, ``True`` after a
        successful bulk request. Raises ``TransmissionError`` otherwise; the
        drained documents are lost in that case.
        """

        buffer, transmitter = self._require_started()
        entity = buffer.drain_and_reset()
        if not entity:
            logger.debug("No documents buffered; skipping bulk request.")
            return False
        transmitter.send(entity)
        return True

    def _require_started(self) -> Tuple[BulkBuffer, BulkTransmitter]:
        buffer, transmitter = self._buffer, self._transmitter
        if buffer is None or transmitter is None:
            raise LifecycleError("ElasticWriter used before start() or after close().")
        return buffer, transmitter

    def __repr__(self) -> str:
        return (
            f"ElasticWriter(root_prefix={self.root_prefix!r}, "
            f"connection_url={self.connection_url!r}, index_name={self.root_prefix!r})"
        )
