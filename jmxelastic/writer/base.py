"""Interfaces y tipos comunes para los writers de métricas JMX."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Protocol, Tuple, runtime_checkable


@dataclass(frozen=True)
class Server:
    """Identidad del proceso monitorizado del que provienen las muestras."""

    host: str
    port: str
    alias: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Server":
        host = data.get("host")
        if not host:
            raise ValueError("'server.host' es obligatorio")
        port = data.get("port")
        if port in (None, ""):
            raise ValueError("'server.port' es obligatorio")
        alias = data.get("alias")
        return cls(host=str(host), port=str(port), alias=str(alias) if alias else None)


@dataclass(frozen=True)
class Sample:
    """Una observación de un atributo JMX tal como la entrega el colector."""

    obj_domain: str
    class_name: str
    type_name: str
    attribute_name: str
    value: Any
    epoch: int
    value_path: Tuple[str, ...] = field(default_factory=tuple)
    key_alias: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Sample":
        """Build a sample from a plain mapping using the JMX result field names."""

        path_raw = data.get("value_path", data.get("valuePath")) or ()
        if isinstance(path_raw, str):
            value_path: Tuple[str, ...] = (path_raw,)
        else:
            value_path = tuple(str(segment) for segment in path_raw)
        epoch = data.get("epoch", data.get("timestamp"))
        key_alias = data.get("key_alias", data.get("keyAlias"))
        if epoch is None:
            raise ValueError("'sample.epoch' es obligatorio")
        return cls(
            obj_domain=str(data.get("obj_domain", data.get("objDomain", ""))),
            class_name=str(data.get("class_name", data.get("className", ""))),
            type_name=str(data.get("type_name", data.get("typeName", ""))),
            attribute_name=str(data.get("attribute_name", data.get("attributeName", ""))),
            value=data.get("value"),
            epoch=int(epoch),
            value_path=value_path,
            key_alias=str(key_alias) if key_alias is not None else None,
        )


@runtime_checkable
class OutputWriter(Protocol):
    """Contrato mínimo de un writer conectado al planificador de consultas."""

    def start(self) -> None:
        """Reserva los recursos del writer."""

    def write(self, server: Server, samples: Iterable[Sample]) -> bool:
        """Procesa las muestras de un ciclo de recolección."""

    def validate_setup(self, server: Server) -> None:
        """Comprueba la configuración antes de la primera escritura."""

    def close(self) -> None:
        """Libera los recursos asociados al writer."""
