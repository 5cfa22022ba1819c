# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Engine session FSM states.

Defines the states of one navigation-registration exchange over the
engine JSON-RPC channel.

FSM Diagram::

    +------------+  OpenDoc  +----------+  CreateObject  +----------------+  DoSave  +-------+
    | connecting | --------> | app_open | -------------> | object_created | -------> | saved |
    +------------+           +----------+                +----------------+          +-------+
          |                       |                              |
          +-----------------------+------------------------------+----> failed
"""

from enum import Enum


class EnumEngineSessionState(str, Enum):
    """Engine session FSM states.

    Attributes:
        CONNECTING: Socket handshake in progress or OpenDoc pending.
        APP_OPEN: Application opened; handle known.
        OBJECT_CREATED: Link-navigation object created inside the app.
        SAVED: Application persisted (terminal success).
        FAILED: Protocol error, malformed frame, closure or timeout (terminal).
    """

    CONNECTING = "connecting"
    APP_OPEN = "app_open"
    OBJECT_CREATED = "object_created"
    SAVED = "saved"
    FAILED = "failed"


__all__: list[str] = ["EnumEngineSessionState"]
