"""Network connectivity probes."""

from __future__ import annotations

import logging
import socket
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class ConnectivityProbe(ABC):
    """Synchronous check for network reachability. Must have no side effects."""

    @abstractmethod
    def is_connected(self) -> bool:
        ...


class SocketConnectivityProbe(ConnectivityProbe):
    """
    Reports connected when a TCP connection to ``host:port`` can be opened.
    Defaults to a public DNS resolver, which answers on port 53 almost everywhere.
    Blocks for up to ``timeout_seconds``; call it outside a running event loop
    or accept the stall.
    """

    def __init__(self, host: str = "8.8.8.8", port: int = 53, timeout_seconds: float = 3.0) -> None:
        self.host = host
        self.port = port
        self.timeout_seconds = timeout_seconds

    def is_connected(self) -> bool:
        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout_seconds):
                return True
        except OSError as e:
            logger.debug("Connectivity check to %s:%s failed: %s", self.host, self.port, e)
            return False


class StaticConnectivityProbe(ConnectivityProbe):
    """Fixed answer. Used for offline mode and tests."""

    def __init__(self, connected: bool = True) -> None:
        self.connected = connected

    def is_connected(self) -> bool:
        return self.connected
