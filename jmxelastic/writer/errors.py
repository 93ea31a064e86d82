"""Errores propios del writer de Elasticsearch."""

from __future__ import annotations

from typing import Optional


class ElasticWriterError(Exception):
    """Base class for every error raised by the writer."""


class ValueConversionError(ElasticWriterError, ValueError):
    """A sample accepted as numeric could not be converted to float."""


class LifecycleError(ElasticWriterError):
    """The writer failed to start, to close, or was used before start()."""


class TransmissionError(ElasticWriterError):
    """The bulk request failed or the backend answered with a non-200 status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, body: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
