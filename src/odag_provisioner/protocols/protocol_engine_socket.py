# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocols for the engine WebSocket channel.

The engine session only needs text frames in both directions and a way to
close with a specific code. Narrowing the socket to this surface lets the
session run against aiohttp in production and against scripted sockets in
tests.

Example:
    >>> async def connect(url, headers, ssl_context):
    ...     return ScriptedSocket([...])
    >>> handler = HandlerEngineNavigation(config, identity, connector=connect)
"""

from __future__ import annotations

import ssl
from collections.abc import Mapping
from typing import Protocol, runtime_checkable

# RFC 6455 close codes used by the engine session.
CLOSE_NORMAL: int = 1000
CLOSE_UNSUPPORTED_DATA: int = 1007
CLOSE_INTERNAL_ERROR: int = 1011


@runtime_checkable
class ProtocolEngineSocket(Protocol):
    """An open text-frame WebSocket to the engine.

    Methods:
        send_text: Send one text frame
        receive_text: Wait for the next text frame, ``None`` once closed
        close: Close with a WebSocket close code

    Attributes:
        close_code: Close code reported by the peer, once closed
        close_reason: Close reason reported by the peer, once closed
    """

    @property
    def close_code(self) -> int | None: ...

    @property
    def close_reason(self) -> str: ...

    async def send_text(self, data: str) -> None:
        """Send one text frame."""
        ...

    async def receive_text(self) -> str | None:
        """Return the next text frame, or ``None`` when the socket has closed."""
        ...

    async def close(self, code: int = CLOSE_NORMAL, reason: str = "") -> None:
        """Close the socket; calling it on a closed socket is a no-op."""
        ...


class ProtocolEngineConnector(Protocol):
    """Opens an engine socket for a URL with the given headers and TLS context."""

    async def __call__(
        self,
        url: str,
        headers: Mapping[str, str],
        ssl_context: ssl.SSLContext,
    ) -> ProtocolEngineSocket: ...


__all__: list[str] = [
    "CLOSE_INTERNAL_ERROR",
    "CLOSE_NORMAL",
    "CLOSE_UNSUPPORTED_DATA",
    "ProtocolEngineConnector",
    "ProtocolEngineSocket",
]
