# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Provisioner Error Classes.

All error classes extend ModelOnexError (from omnibase_core) through
OdagRuntimeError so that every failure carries an error code, a correlation
ID and structured context.

Error Hierarchy:
    ModelOnexError (from omnibase_core)
    └── OdagRuntimeError
        ├── ConfigurationError              (fatal, startup-time)
        ├── InvalidRequestError             (request rejected before any call)
        │   └── MissingFieldError
        ├── AuthenticationFailedError       (fatal per request)
        ├── ApplicationLookupError          (metadata lookup transport/status failure)
        ├── ApplicationNotFoundError        (expected, reported, not retried)
        ├── LinkCreationError               (link-creation failures, never retried)
        │   ├── InvalidLinkConfigurationError   (400)
        │   ├── LinkUnauthorizedError           (401)
        │   ├── LinkForbiddenError              (403)
        │   ├── LinkServiceUnavailableError     (404)
        │   ├── LinkEndpointMisconfiguredError  (405)
        │   ├── LinkRemoteServerError           (500)
        │   ├── LinkUnexpectedStatusError       (anything else)
        │   └── LinkServiceConnectionError      (transport failure)
        └── NavigationRegistrationError     (engine leg; downgrades to partial success)
            ├── EngineConnectionError
            ├── EngineConnectionTimeoutError
            ├── EngineConnectionClosedError
            ├── EngineProtocolDecodeError
            └── EngineRemoteError
"""

from __future__ import annotations

from omnibase_core.enums.enum_core_error_code import EnumCoreErrorCode
from omnibase_core.models.errors.model_onex_error import ModelOnexError

from odag_provisioner.enums import EnumApplicationRole
from odag_provisioner.errors.model_odag_error_context import ModelOdagErrorContext


class OdagRuntimeError(ModelOnexError):
    """Base error class for the provisioner.

    Structured Fields (via ModelOdagErrorContext):
        transport_type: Transport used by the failing call
        operation: Operation being performed
        correlation_id: Request correlation ID
        target_name: Remote subsystem name
    """

    def __init__(
        self,
        message: str,
        error_code: EnumCoreErrorCode | None = None,
        context: ModelOdagErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        """Initialize OdagRuntimeError with structured fields.

        Args:
            message: Human-readable error message
            error_code: Error code (defaults to OPERATION_FAILED)
            context: Bundled context (transport_type, operation, etc.)
            **extra_context: Additional context information
        """
        structured_context: dict[str, object] = dict(extra_context)

        correlation_id = None
        if context is not None:
            if context.transport_type is not None:
                structured_context["transport_type"] = context.transport_type
            if context.operation is not None:
                structured_context["operation"] = context.operation
            if context.target_name is not None:
                structured_context["target_name"] = context.target_name
            correlation_id = context.correlation_id

        super().__init__(
            message=message,
            error_code=error_code or EnumCoreErrorCode.OPERATION_FAILED,
            correlation_id=correlation_id,
            **structured_context,
        )


class ConfigurationError(OdagRuntimeError):
    """Raised when certificate material or configuration cannot be loaded.

    This is fatal and non-retryable; it surfaces at construction time, never
    per request.
    """

    def __init__(
        self,
        message: str,
        context: ModelOdagErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCoreErrorCode.INVALID_CONFIGURATION,
            context=context,
            **extra_context,
        )


class InvalidRequestError(OdagRuntimeError):
    """Raised when a provisioning request fails validation before any remote call."""

    def __init__(
        self,
        message: str,
        error_code: EnumCoreErrorCode | None = None,
        context: ModelOdagErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code or EnumCoreErrorCode.INVALID_INPUT,
            context=context,
            **extra_context,
        )


class MissingFieldError(InvalidRequestError):
    """Raised when a provisioning request lacks a required field."""

    def __init__(
        self,
        field_name: str,
        context: ModelOdagErrorContext | None = None,
    ) -> None:
        self.field_name = field_name
        super().__init__(
            message=f"Missing required field: {field_name}",
            error_code=EnumCoreErrorCode.MISSING_REQUIRED_PARAMETER,
            context=context,
            field_name=field_name,
        )


class AuthenticationFailedError(OdagRuntimeError):
    """Raised when the initial authentication probe fails."""

    def __init__(
        self,
        message: str,
        context: ModelOdagErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCoreErrorCode.AUTHENTICATION_ERROR,
            context=context,
            **extra_context,
        )


class ApplicationLookupError(OdagRuntimeError):
    """Raised when an application metadata lookup fails for reasons other than 404."""

    def __init__(
        self,
        message: str,
        app_id: str,
        context: ModelOdagErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        self.app_id = app_id
        super().__init__(
            message=message,
            error_code=EnumCoreErrorCode.NETWORK_ERROR,
            context=context,
            app_id=app_id,
            **extra_context,
        )


class ApplicationNotFoundError(OdagRuntimeError):
    """Raised when a referenced application does not resolve.

    Example:
        >>> raise ApplicationNotFoundError(EnumApplicationRole.TEMPLATE, "B")
    """

    def __init__(
        self,
        role: EnumApplicationRole,
        app_id: str,
        reason: str | None = None,
        context: ModelOdagErrorContext | None = None,
    ) -> None:
        self.role = role
        self.app_id = app_id
        detail = reason or f"App ID not found: {app_id}"
        super().__init__(
            message=f"{role.value.capitalize()} app validation failed: {detail}",
            error_code=EnumCoreErrorCode.RESOURCE_NOT_FOUND,
            context=context,
            role=role.value,
            app_id=app_id,
        )


class LinkCreationError(OdagRuntimeError):
    """Base class for link-creation failures; none are retried automatically."""

    def __init__(
        self,
        message: str,
        error_code: EnumCoreErrorCode | None = None,
        context: ModelOdagErrorContext | None = None,
        status_code: int | None = None,
        **extra_context: object,
    ) -> None:
        self.status_code = status_code
        if status_code is not None:
            extra_context["status_code"] = status_code
        super().__init__(
            message=message,
            error_code=error_code or EnumCoreErrorCode.OPERATION_FAILED,
            context=context,
            **extra_context,
        )


class InvalidLinkConfigurationError(LinkCreationError):
    """HTTP 400 from the link service."""

    def __init__(
        self,
        message: str,
        context: ModelOdagErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCoreErrorCode.INVALID_INPUT,
            context=context,
            status_code=400,
            **extra_context,
        )


class LinkUnauthorizedError(LinkCreationError):
    """HTTP 401 from the link service."""

    def __init__(
        self,
        message: str,
        context: ModelOdagErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCoreErrorCode.AUTHENTICATION_ERROR,
            context=context,
            status_code=401,
            **extra_context,
        )


class LinkForbiddenError(LinkCreationError):
    """HTTP 403 from the link service."""

    def __init__(
        self,
        message: str,
        context: ModelOdagErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCoreErrorCode.PERMISSION_DENIED,
            context=context,
            status_code=403,
            **extra_context,
        )


class LinkServiceUnavailableError(LinkCreationError):
    """HTTP 404 from the link service; the ODAG subsystem may not be running."""

    def __init__(
        self,
        message: str,
        context: ModelOdagErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCoreErrorCode.SERVICE_UNAVAILABLE,
            context=context,
            status_code=404,
            **extra_context,
        )


class LinkEndpointMisconfiguredError(LinkCreationError):
    """HTTP 405 from the link service."""

    def __init__(
        self,
        message: str,
        context: ModelOdagErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCoreErrorCode.INVALID_CONFIGURATION,
            context=context,
            status_code=405,
            **extra_context,
        )


class LinkRemoteServerError(LinkCreationError):
    """HTTP 500 from the link service."""

    def __init__(
        self,
        message: str,
        context: ModelOdagErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCoreErrorCode.INTERNAL_ERROR,
            context=context,
            status_code=500,
            **extra_context,
        )


class LinkUnexpectedStatusError(LinkCreationError):
    """Any other non-2xx status from the link service."""

    def __init__(
        self,
        message: str,
        status_code: int,
        context: ModelOdagErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCoreErrorCode.OPERATION_FAILED,
            context=context,
            status_code=status_code,
            **extra_context,
        )


class LinkServiceConnectionError(LinkCreationError):
    """Transport-level failure talking to the link service."""

    def __init__(
        self,
        message: str,
        context: ModelOdagErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCoreErrorCode.NETWORK_ERROR,
            context=context,
            **extra_context,
        )


class NavigationRegistrationError(OdagRuntimeError):
    """Base class for engine-leg failures.

    The orchestrator downgrades these to a partial success because the link
    resource already exists remotely when they occur.
    """


class EngineConnectionError(NavigationRegistrationError):
    """Socket-level failure on the engine channel."""

    def __init__(
        self,
        message: str,
        context: ModelOdagErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCoreErrorCode.NETWORK_ERROR,
            context=context,
            **extra_context,
        )


class EngineConnectionTimeoutError(NavigationRegistrationError):
    """Handshake or read did not complete within the configured interval."""

    def __init__(
        self,
        message: str,
        context: ModelOdagErrorContext | None = None,
        timeout_seconds: float | None = None,
        **extra_context: object,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        if timeout_seconds is not None:
            extra_context["timeout_seconds"] = timeout_seconds
        super().__init__(
            message=message,
            error_code=EnumCoreErrorCode.TIMEOUT_ERROR,
            context=context,
            **extra_context,
        )


class EngineConnectionClosedError(NavigationRegistrationError):
    """The engine closed the socket before the exchange completed."""

    def __init__(
        self,
        close_code: int | None,
        reason: str = "",
        context: ModelOdagErrorContext | None = None,
    ) -> None:
        self.close_code = close_code
        self.reason = reason
        super().__init__(
            message=f"WebSocket closed with code {close_code}: {reason}",
            error_code=EnumCoreErrorCode.NETWORK_ERROR,
            context=context,
            close_code=close_code,
            reason=reason,
        )


class EngineProtocolDecodeError(NavigationRegistrationError):
    """An inbound frame could not be parsed or lacked a required field."""

    def __init__(
        self,
        message: str,
        context: ModelOdagErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumCoreErrorCode.PARSING_ERROR,
            context=context,
            **extra_context,
        )


class EngineRemoteError(NavigationRegistrationError):
    """The engine answered a request with an error frame.

    ``remote_message`` holds the engine's message text verbatim.
    """

    def __init__(
        self,
        remote_message: str,
        remote_code: int | None = None,
        context: ModelOdagErrorContext | None = None,
    ) -> None:
        self.remote_message = remote_message
        self.remote_code = remote_code
        super().__init__(
            message=remote_message,
            error_code=EnumCoreErrorCode.OPERATION_FAILED,
            context=context,
            remote_code=remote_code,
        )


__all__: list[str] = [
    "ApplicationLookupError",
    "ApplicationNotFoundError",
    "AuthenticationFailedError",
    "ConfigurationError",
    "EngineConnectionClosedError",
    "EngineConnectionError",
    "EngineConnectionTimeoutError",
    "EngineProtocolDecodeError",
    "EngineRemoteError",
    "InvalidLinkConfigurationError",
    "InvalidRequestError",
    "LinkCreationError",
    "LinkEndpointMisconfiguredError",
    "LinkForbiddenError",
    "LinkRemoteServerError",
    "LinkServiceConnectionError",
    "LinkServiceUnavailableError",
    "LinkUnauthorizedError",
    "LinkUnexpectedStatusError",
    "MissingFieldError",
    "NavigationRegistrationError",
    "OdagRuntimeError",
]
