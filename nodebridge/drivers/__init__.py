"""Driver registry — the closed set of supported server dialects.

WHY: The orchestrator picks a dialect by name from node configuration.
A central dict keeps the set explicit: adding a dialect means one module
and one line here, no plugin loading.

HOW: DRIVERS maps dialect names to driver *classes*; create_driver()
instantiates one.

RULES:
- Keys are the names accepted in NodeOptions.driver and on the CLI
- Unknown names raise ConfigurationError
"""

from __future__ import annotations

from typing import Any, Dict, Type

from nodebridge.drivers.base import AbstractDriver, DriverConfig, NodeHandler, PlayerLike
from nodebridge.drivers.lavalink4 import Lavalink4
from nodebridge.drivers.nodelink2 import Nodelink2
from nodebridge.errors import ConfigurationError

DRIVERS: Dict[str, Type[AbstractDriver]] = {
    "lavalink4": Lavalink4,
    "nodelink2": Nodelink2,
}


def create_driver(name: str, **kwargs: Any) -> AbstractDriver:
    try:
        driver_cls = DRIVERS[name]
    except KeyError:
        raise ConfigurationError(
            "Unknown driver {!r}. Available: {}".format(name, ", ".join(sorted(DRIVERS)))
        ) from None
    return driver_cls(**kwargs)


__all__ = [
    "DRIVERS",
    "AbstractDriver",
    "DriverConfig",
    "Lavalink4",
    "NodeHandler",
    "Nodelink2",
    "PlayerLike",
    "create_driver",
]
