# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol interfaces for pluggable transports."""

from odag_provisioner.protocols.protocol_engine_socket import (
    CLOSE_INTERNAL_ERROR,
    CLOSE_NORMAL,
    CLOSE_UNSUPPORTED_DATA,
    ProtocolEngineConnector,
    ProtocolEngineSocket,
)

__all__: list[str] = [
    "CLOSE_INTERNAL_ERROR",
    "CLOSE_NORMAL",
    "CLOSE_UNSUPPORTED_DATA",
    "ProtocolEngineConnector",
    "ProtocolEngineSocket",
]
