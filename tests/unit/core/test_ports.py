"""Unit tests for core.ports — free port discovery and listener binding."""
# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import socket
from unittest.mock import patch

import pytest

from core.exceptions import NoAvailablePortError, ServerStartupError
from core.ports import (
    MAX_PORT,
    MIN_PORT,
    bind_listener,
    find_available_port,
    is_port_available,
)


@pytest.fixture()
def busy_socket():
    """A socket listening on an OS-assigned port."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("", 0))
    sock.listen(1)
    yield sock
    sock.close()


class TestIsPortAvailable:
    @pytest.mark.parametrize("port", [-1, 65536, 100000])
    def test_out_of_range_is_unavailable(self, port):
        assert is_port_available(port) is False

    def test_listening_port_is_unavailable(self, busy_socket):
        port = busy_socket.getsockname()[1]
        assert is_port_available(port) is False

    def test_released_port_is_available(self):
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.bind(("", 0))
        port = sock.getsockname()[1]
        sock.close()
        assert is_port_available(port) is True


class TestFindAvailablePort:
    def test_preferred_port_returned_when_free(self):
        with patch("core.ports.is_port_available", return_value=True) as probe:
            assert find_available_port(8080) == 8080
        probe.assert_called_once_with(8080)

    def test_scan_starts_at_random_port(self):
        with patch("core.ports.random.randint", return_value=40000), \
             patch("core.ports.is_port_available", return_value=True):
            assert find_available_port(0) == 40000

    def test_busy_preferred_port_falls_back_to_scan(self):
        with patch("core.ports.random.randint", return_value=40000), \
             patch("core.ports.is_port_available", side_effect=lambda p: p != 8080):
            assert find_available_port(8080) == 40000

    def test_scan_wraps_around_to_min_port(self):
        free = MIN_PORT + 5
        with patch("core.ports.random.randint", return_value=MAX_PORT - 2), \
             patch("core.ports.is_port_available", side_effect=lambda p: p == free):
            assert find_available_port() == free

    def test_scan_result_is_in_range(self):
        port = find_available_port()
        assert MIN_PORT <= port <= MAX_PORT

    def test_all_ports_busy_raises(self):
        with patch("core.ports.is_port_available", return_value=False):
            with pytest.raises(NoAvailablePortError):
                find_available_port(8080)


class TestBindListener:
    def test_binds_free_port(self):
        sock = bind_listener("127.0.0.1", 0)
        try:
            assert sock.getsockname()[1] > 0
        finally:
            sock.close()

    def test_taken_port_raises_startup_error(self, busy_socket):
        port = busy_socket.getsockname()[1]
        with pytest.raises(ServerStartupError, match=str(port)):
            bind_listener("", port)
