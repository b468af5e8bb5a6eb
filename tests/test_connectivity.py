"""Tests for connectivity probes."""

import socket

from mars_estate.connectivity import SocketConnectivityProbe, StaticConnectivityProbe


def test_static_probe() -> None:
    assert StaticConnectivityProbe(True).is_connected()
    assert not StaticConnectivityProbe(False).is_connected()


def test_socket_probe_reachable() -> None:
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(1)
    try:
        port = server.getsockname()[1]
        assert SocketConnectivityProbe("127.0.0.1", port, timeout_seconds=1).is_connected()
    finally:
        server.close()


def test_socket_probe_unreachable() -> None:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    assert not SocketConnectivityProbe("127.0.0.1", port, timeout_seconds=1).is_connected()
