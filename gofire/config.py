from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_LISTEN_ON = ":8600"


@dataclass(frozen=True)
class GpioPins:
    # BCM numbering, per the Waveshare RPi Relay Board wiring.
    # Fixed on purpose: the board is soldered to these lines.
    ch1: int = 26
    ch2: int = 20
    ch3: int = 21


GPIO_PINS = GpioPins()


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8600
    debug: bool = False

    @property
    def listen_on(self) -> str:
        return f"{self.host}:{self.port}"


def parse_listen_address(address: str) -> Tuple[str, int]:
    """
    Split a ``host:port`` listen address.

    An empty host (``":8600"``) means all interfaces. Raises ValueError on
    anything that is not a usable TCP port.
    """
    host, sep, port_str = address.strip().rpartition(":")
    if not sep:
        raise ValueError(f"Invalid listen address '{address}' (expected host:port)")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port = int(port_str)
    except ValueError:
        raise ValueError(f"Invalid port in listen address '{address}'") from None
    if not 0 < port < 65536:
        raise ValueError(f"Port out of range in listen address '{address}'")
    return host or "0.0.0.0", port


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


def server_config_from_env(listen_on: Optional[str] = None) -> ServerConfig:
    """
    Build the server config; an explicit ``listen_on`` wins over GOFIRE_LISTEN_ON.
    """
    address = listen_on or os.getenv("GOFIRE_LISTEN_ON") or DEFAULT_LISTEN_ON
    host, port = parse_listen_address(address)
    return ServerConfig(host=host, port=port, debug=_env_flag("GOFIRE_WEB_DEBUG"))
