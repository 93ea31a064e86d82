"""Typed configuration models implemented with dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

DEFAULT_ROOT_PREFIX = "jmxtrans"


def _as_str(value: Any, field_name: str, *, optional: bool = False) -> Optional[str]:
    if value is None:
        if optional:
            return None
        raise ValueError(f"'{field_name}' es obligatorio")
    text = str(value).strip()
    if not text and not optional:
        raise ValueError(f"'{field_name}' no puede estar vacío")
    return text or None


def _as_bool(value: Any, default: bool = True) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"1", "true", "yes", "si", "sí"}:
        return True
    if text in {"0", "false", "no"}:
        return False
    return default


@dataclass
class ElasticWriterSettings:
    connection_url: str
    root_prefix: str = DEFAULT_ROOT_PREFIX
    username: Optional[str] = None
    password: Optional[str] = None
    verify_ssl: bool = True
    boolean_as_number: bool = False
    debug: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ElasticWriterSettings":
        url = _as_str(data.get("connection_url", data.get("connectionUrl")), "connection_url")
        if not url.lower().startswith(("http://", "https://")):
            raise ValueError("connection_url debe comenzar con http:// o https://")
        prefix_raw = data.get("root_prefix", data.get("rootPrefix"))
        # Un prefijo vacío es válido: el índice queda solo con la fecha.
        root_prefix = DEFAULT_ROOT_PREFIX if prefix_raw is None else str(prefix_raw).strip()
        username = _as_str(data.get("username"), "username", optional=True)
        password_raw = data.get("password")
        password = str(password_raw) if password_raw not in (None, "") else None
        if password and not username:
            raise ValueError("password requiere username")
        verify_ssl = _as_bool(data.get("verify_ssl"), True)
        boolean_as_number = _as_bool(data.get("boolean_as_number", data.get("booleanAsNumber")), False)
        debug = _as_bool(data.get("debug"), False)
        return cls(
            connection_url=url,
            root_prefix=root_prefix,
            username=username,
            password=password,
            verify_ssl=verify_ssl,
            boolean_as_number=boolean_as_number,
            debug=debug,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "connection_url": self.connection_url,
            "root_prefix": self.root_prefix,
            "username": self.username,
            "password": self.password,
            "verify_ssl": self.verify_ssl,
            "boolean_as_number": self.boolean_as_number,
            "debug": self.debug,
        }
