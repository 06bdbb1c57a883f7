# ServerGo - Static File Server
# Copyright (C) 2026 ServerGo Authors
# SPDX-License-Identifier: Apache-2.0

"""Free TCP port discovery used once at startup.

Each probe binds a real listening socket and closes it immediately, so a
returned port was free at probe time only.  The caller binds for real later
and must treat a failure there as a startup error.
"""

from __future__ import annotations

import logging
import random
import socket

from core.exceptions import NoAvailablePortError, ServerStartupError

logger = logging.getLogger("servergo.ports")

MIN_PORT = 1024  # skip privileged ports
MAX_PORT = 65535


def is_port_available(port: int, host: str = "") -> bool:
    """Return True if a TCP listener can be bound on *port* right now."""
    if port < 0 or port > MAX_PORT:
        return False

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(1)
    except OSError:
        return False
    finally:
        sock.close()
    return True


def find_available_port(preferred: int = 0) -> int:
    """Find a bindable TCP port, trying *preferred* first when it is > 0.

    Falls back to a linear scan starting at a random port in
    ``[MIN_PORT, MAX_PORT]``, wrapping around to ``MIN_PORT``.

    Raises:
        NoAvailablePortError: every port in the range failed to bind.
    """
    if preferred > 0:
        if is_port_available(preferred):
            return preferred
        logger.debug("Preferred port %d is unavailable; scanning", preferred)

    start = random.randint(MIN_PORT, MAX_PORT)
    for port in range(start, MAX_PORT + 1):
        if is_port_available(port):
            return port
    for port in range(MIN_PORT, start):
        if is_port_available(port):
            return port

    raise NoAvailablePortError(
        f"no available TCP port in range {MIN_PORT}-{MAX_PORT}"
    )


def bind_listener(host: str, port: int, backlog: int = 128) -> socket.socket:
    """Bind and listen on *host*:*port* for the real server.

    Raises:
        ServerStartupError: the bind failed, e.g. the port was taken after
            it was probed.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(backlog)
    except OSError as exc:
        sock.close()
        raise ServerStartupError(f"cannot listen on {host or '*'}:{port}: {exc}") from exc
    return sock
