# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ODAG Provisioner Errors Module.

Exports the error hierarchy rooted at OdagRuntimeError and the
ModelOdagErrorContext model bundling structured error fields.

Correlation ID Assignment:
    Every provisioning request gets one correlation ID. Handlers receive it
    from the orchestrator and attach it to every error context they build,
    so a single request can be followed across the REST and engine legs.

Error Sanitization Guidelines:
    NEVER include in error messages or context:
        - The anti-forgery token
        - Private keys or certificate contents
        - Raw response bodies (use sanitize_error_string first)

    SAFE to include:
        - Subsystem names ("qrs", "odag-link-service", "engine")
        - Operation names, HTTP status codes, WebSocket close codes
        - Application and link identifiers
        - Correlation IDs
"""

from odag_provisioner.errors.model_odag_error_context import ModelOdagErrorContext
from odag_provisioner.errors.odag_errors import (
    ApplicationLookupError,
    ApplicationNotFoundError,
    AuthenticationFailedError,
    ConfigurationError,
    EngineConnectionClosedError,
    EngineConnectionError,
    EngineConnectionTimeoutError,
    EngineProtocolDecodeError,
    EngineRemoteError,
    InvalidLinkConfigurationError,
    InvalidRequestError,
    LinkCreationError,
    LinkEndpointMisconfiguredError,
    LinkForbiddenError,
    LinkRemoteServerError,
    LinkServiceConnectionError,
    LinkServiceUnavailableError,
    LinkUnauthorizedError,
    LinkUnexpectedStatusError,
    MissingFieldError,
    NavigationRegistrationError,
    OdagRuntimeError,
)

__all__: list[str] = [
    # Context model
    "ModelOdagErrorContext",
    # Base
    "OdagRuntimeError",
    # Startup / request validation
    "ConfigurationError",
    "InvalidRequestError",
    "MissingFieldError",
    "AuthenticationFailedError",
    # Application validation
    "ApplicationLookupError",
    "ApplicationNotFoundError",
    # Link creation
    "LinkCreationError",
    "InvalidLinkConfigurationError",
    "LinkUnauthorizedError",
    "LinkForbiddenError",
    "LinkServiceUnavailableError",
    "LinkEndpointMisconfiguredError",
    "LinkRemoteServerError",
    "LinkUnexpectedStatusError",
    "LinkServiceConnectionError",
    # Navigation registration
    "NavigationRegistrationError",
    "EngineConnectionError",
    "EngineConnectionTimeoutError",
    "EngineConnectionClosedError",
    "EngineProtocolDecodeError",
    "EngineRemoteError",
]
