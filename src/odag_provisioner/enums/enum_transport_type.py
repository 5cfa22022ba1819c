# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Transport Type Enumeration.

Defines the transport types used to reach the remote analytics platform.
Used for error context and log enrichment.
"""

from enum import Enum


class EnumTransportType(str, Enum):
    """Transport types for remote platform calls.

    Attributes:
        HTTP: REST calls to the repository API and the link service
        WEBSOCKET: JSON-RPC session against the engine service
        LOCAL: Local resources (certificate files, configuration)
    """

    HTTP = "http"
    WEBSOCKET = "websocket"
    LOCAL = "local"


__all__: list[str] = ["EnumTransportType"]
