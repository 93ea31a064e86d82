"""Send one cycle of JMX samples read from a YAML/JSON file to Elasticsearch."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Tuple

import yaml

from jmxelastic.config.schema import ElasticWriterSettings
from jmxelastic.config.store import (
    CONFIG_DIR,
    default_writer_settings,
    load_env_file,
    load_writer_settings,
    save_writer_settings,
    writer_settings_from_env,
)

from .base import Sample, Server
from .elastic import ElasticWriter
from .errors import ElasticWriterError, LifecycleError, TransmissionError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_TRANSMISSION = 1
EXIT_CONFIG = 2


def load_batch(path: Path) -> Tuple[Server, List[Sample]]:
    """Read the server identity and its samples from ``path``.

    JSON is accepted too since YAML is a superset of it.
    """

    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected a mapping at {path}, found {type(raw).__name__}")
    server_payload = raw.get("server")
    if not isinstance(server_payload, Mapping):
        raise ValueError("El bloque 'server' es obligatorio")
    samples_payload: Any = raw.get("samples") or []
    if not isinstance(samples_payload, list):
        raise ValueError("samples debe ser una lista")
    server = Server.from_mapping(server_payload)
    samples = [Sample.from_mapping(item) for item in samples_payload]
    return server, samples


def _resolve_settings(args: argparse.Namespace) -> ElasticWriterSettings:
    if args.env_file is not None:
        return writer_settings_from_env(load_env_file(args.env_file))
    cfg_path = args.config or CONFIG_DIR / "elastic.yaml"
    if args.init_config and not cfg_path.exists():
        save_writer_settings(default_writer_settings(), cfg_path)
        logger.warning("Generated template configuration at %s; review connection_url.", cfg_path)
    return load_writer_settings(cfg_path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("samples", type=Path, help="YAML/JSON file with 'server' and 'samples'")
    parser.add_argument("--config", type=Path, default=None, help="writer settings (elastic.yaml)")
    parser.add_argument("--env-file", type=Path, default=None, help="read ELASTIC_* settings from a .env file")
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="write a template settings file when --config does not exist",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    args = build_parser().parse_args(argv)
    try:
        settings = _resolve_settings(args)
        server, samples = load_batch(args.samples)
    except (OSError, TypeError, ValueError, yaml.YAMLError) as exc:
        logger.error("Invalid configuration or sample file: %s", exc)
        return EXIT_CONFIG

    writer = ElasticWriter(settings)
    try:
        writer.start()
    except LifecycleError as exc:
        logger.error("%s", exc)
        return EXIT_CONFIG

    try:
        writer.validate_setup(server)
        buffered = writer.add_samples(server, samples)
        sent = writer.flush()
    except TransmissionError as exc:
        logger.error("Bulk write to %s failed: %s", settings.connection_url, exc)
        return EXIT_TRANSMISSION
    finally:
        try:
            writer.close()
        except ElasticWriterError:
            logger.exception("ElasticWriter did not close cleanly.")

    if sent:
        logger.info(
            "Bulk request for %d of %d samples from %s accepted by %s",
            buffered,
            len(samples),
            server.host,
            settings.connection_url,
        )
    else:
        logger.info("No numeric samples in %s; nothing was sent.", args.samples)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
