"""Helpers to load, validate and persist the writer configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import dotenv_values

from .schema import ElasticWriterSettings

CONFIG_DIR = Path(__file__).resolve().parent


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at {path}, found {type(data).__name__}")
    return data


def _write_yaml(path: Path, payload: Mapping[str, Any]):
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(dict(payload), fh, sort_keys=False, allow_unicode=True)


def load_writer_settings(path: Optional[Path] = None) -> ElasticWriterSettings:
    """Read and validate writer settings from elastic.yaml."""

    cfg_path = path or CONFIG_DIR / "elastic.yaml"
    raw = _read_yaml(cfg_path)
    # Permite anidar la sección bajo una clave "elastic".
    section = raw.get("elastic", raw)
    if not isinstance(section, Mapping):
        raise ValueError(f"La sección 'elastic' de {cfg_path} debe ser un mapa")
    return ElasticWriterSettings.from_mapping(section)


def save_writer_settings(settings: ElasticWriterSettings, path: Optional[Path] = None):
    """Persist the writer settings to elastic.yaml."""

    cfg_path = path or CONFIG_DIR / "elastic.yaml"
    _write_yaml(cfg_path, settings.to_dict())


def writer_settings_from_env(env: Mapping[str, Any]) -> ElasticWriterSettings:
    """Create writer settings from ELASTIC_* environment variables."""

    payload = {
        "connection_url": env.get("ELASTIC_URL"),
        "root_prefix": env.get("ELASTIC_ROOT_PREFIX"),
        "username": env.get("ELASTIC_USERNAME"),
        "password": env.get("ELASTIC_PASSWORD"),
        "verify_ssl": env.get("ELASTIC_VERIFY_SSL"),
        "boolean_as_number": env.get("ELASTIC_BOOLEAN_AS_NUMBER"),
        "debug": env.get("ELASTIC_DEBUG"),
    }
    return ElasticWriterSettings.from_mapping(payload)


def default_writer_settings() -> ElasticWriterSettings:
    """Return a template configuration with placeholder values."""

    payload = {
        "connection_url": "http://localhost:9200",
        "root_prefix": "jmxtrans",
        "verify_ssl": True,
        "boolean_as_number": False,
        "debug": False,
    }
    return ElasticWriterSettings.from_mapping(payload)


def load_env_file(path: Path) -> Mapping[str, str]:
    """Load key/value pairs from a dotenv file."""

    values = dotenv_values(str(path))
    return {k: v for k, v in values.items() if v is not None}
