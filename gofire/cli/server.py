from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from gofire.config import DEFAULT_LISTEN_ON, server_config_from_env
from gofire.control.sequencer import Sequencer
from gofire.hardware.outputs import GpioOutputDriver, HardwareFault
from gofire.web.app import create_app

logger = logging.getLogger("gofire.server")


def setup_logging() -> None:
    logging.basicConfig(
        level=os.getenv("GOFIRE_LOG_LEVEL", "INFO").upper(),
        format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gofire-server",
        description="HTTP server controlling a Mertik Maxitrol GV60 through a Raspberry Pi relay board.",
    )
    parser.add_argument(
        "--listen_on",
        default=None,
        help=f"Listen address; default {DEFAULT_LISTEN_ON} (or GOFIRE_LISTEN_ON)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging()

    try:
        cfg = server_config_from_env(args.listen_on)
    except ValueError as e:
        logger.critical("%s", e)
        return 2

    try:
        driver = GpioOutputDriver()
    except HardwareFault as e:
        logger.critical("Relay setup failed: %s", e)
        return 1

    try:
        app = create_app(Sequencer(driver))
        logger.info("GoFire server listening on %s", cfg.listen_on)
        # The reloader would spawn a second process fighting over the GPIO lines.
        app.run(host=cfg.host, port=cfg.port, debug=cfg.debug, threaded=True, use_reloader=False)
    finally:
        driver.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
