# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Transport handlers for the repository API, link service and engine.

Handlers raise typed OdagRuntimeError subclasses; converting them into
provisioning outcomes is the service layer's job.
"""

from odag_provisioner.handlers.engine_rpc_session import (
    JSONRPC_VERSION,
    SESSION_ROOT_HANDLE,
    EngineRpcSession,
)
from odag_provisioner.handlers.handler_engine_navigation import (
    NAVIGATION_OBJECT_TYPE,
    AiohttpEngineSocket,
    HandlerEngineNavigation,
    connect_engine_socket,
)
from odag_provisioner.handlers.handler_resource_api import (
    HandlerResourceApi,
    build_link_payload,
)

__all__: list[str] = [
    "JSONRPC_VERSION",
    "NAVIGATION_OBJECT_TYPE",
    "SESSION_ROOT_HANDLE",
    "AiohttpEngineSocket",
    "EngineRpcSession",
    "HandlerEngineNavigation",
    "HandlerResourceApi",
    "build_link_payload",
    "connect_engine_socket",
]
