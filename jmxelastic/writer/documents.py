"""Conversión de muestras JMX en documentos para la API _bulk."""

from __future__ import annotations

import math
from datetime import date
from typing import Any, Dict, Optional

from jmxelastic.config.schema import DEFAULT_ROOT_PREFIX

from .base import Sample, Server
from .errors import ValueConversionError

ELASTIC_TYPE_NAME = "doc"
INDEX_OPERATION_NAME = "index"
INDEX_PARAM = "_index"
TYPE_PARAM = "_type"
VALUE_PATH_SEPARATOR = "/"


def is_numeric(value: Any) -> bool:
    """Return True when ``value`` parses as a finite number.

    Booleans are never numeric here; the writer converts them beforehand
    when ``boolean_as_number`` is enabled.
    """

    if value is None or isinstance(value, bool):
        return False
    # float() also accepts digit separators such as "1_000".
    if isinstance(value, str) and "_" in value:
        return False
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return False
    return math.isfinite(number)


def boolean_as_number(value: Any) -> Any:
    """Map ``True``/``False`` to ``1``/``0`` and leave anything else untouched."""

    if isinstance(value, bool):
        return int(value)
    return value


def sample_to_document(server: Server, sample: Sample) -> Dict[str, Any]:
    """Build the flat document indexed for one numeric sample.

    ``valuePath`` segments are joined without escaping, so a segment that
    already contains ``/`` cannot be told apart from two segments.
    """

    try:
        value = float(sample.value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValueConversionError(
            f"Cannot convert value {sample.value!r} of attribute {sample.attribute_name!r} to float"
        ) from exc

    return {
        "serverAlias": server.alias,
        "server": server.host,
        "port": server.port,
        "objDomain": sample.obj_domain,
        "className": sample.class_name,
        "typeName": sample.type_name,
        "attributeName": sample.attribute_name,
        "valuePath": VALUE_PATH_SEPARATOR.join(str(segment) for segment in sample.value_path),
        "keyAlias": sample.key_alias,
        "value": value,
        "timestamp": sample.epoch,
    }


def index_name(root_prefix: Optional[str], current_date: date) -> str:
    """Name of the daily index, e.g. ``jmxtrans2024-03-05``."""

    prefix = DEFAULT_ROOT_PREFIX if root_prefix is None else root_prefix
    return f"{prefix}{current_date.strftime('%Y-%m-%d')}"


def action_header(index: str) -> Dict[str, Dict[str, str]]:
    return {INDEX_OPERATION_NAME: {INDEX_PARAM: index, TYPE_PARAM: ELASTIC_TYPE_NAME}}
