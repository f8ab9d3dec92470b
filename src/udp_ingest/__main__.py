import argparse
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from .infrastructure.logging import setup_logging
from .loader import ConfigError, enabled_configs, load_resolved
from .settings import get_settings

logger = structlog.get_logger()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="udp-ingest",
        description="Resolve UDP listener configuration and report the effective values",
    )
    parser.add_argument(
        "config",
        nargs="?",
        type=Path,
        help="Path to TOML config file (defaults to UDP_INGEST_CONFIG_PATH)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = get_settings()

    setup_logging(settings.env, settings.log_level)

    path = args.config or settings.config_path
    try:
        configs = load_resolved(path)
    except ConfigError as e:
        logger.critical("config_load_failed", path=str(path), error=str(e))
        return 1

    logger.info(
        "config_loaded",
        path=str(path),
        listeners=len(configs),
        enabled=len(enabled_configs(configs)),
    )
    for index, config in enumerate(configs):
        logger.info("udp_listener_config", index=index, config=config.diagnostics())
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
