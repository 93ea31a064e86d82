"""Bulk pipeline that turns JMX samples into Elasticsearch documents."""

from __future__ import annotations

from .base import OutputWriter, Sample, Server
from .buffer import BulkBuffer
from .elastic import ElasticWriter
from .errors import ElasticWriterError, LifecycleError, TransmissionError, ValueConversionError
from .transmitter import BulkTransmitter

__all__ = [
    "BulkBuffer",
    "BulkTransmitter",
    "ElasticWriter",
    "ElasticWriterError",
    "LifecycleError",
    "OutputWriter",
    "Sample",
    "Server",
    "TransmissionError",
    "ValueConversionError",
]
