"""Configuration schema and persistence helpers for the Elasticsearch writer."""

from .schema import DEFAULT_ROOT_PREFIX, ElasticWriterSettings
from .store import (
    default_writer_settings,
    load_env_file,
    load_writer_settings,
    save_writer_settings,
    writer_settings_from_env,
)

__all__ = [
    "DEFAULT_ROOT_PREFIX",
    "ElasticWriterSettings",
    "default_writer_settings",
    "load_env_file",
    "load_writer_settings",
    "save_writer_settings",
    "writer_settings_from_env",
]
