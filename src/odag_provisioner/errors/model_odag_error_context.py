# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ODAG Error Context Model.

This module defines the model bundling the structured fields shared by every
provisioner error, keeping error ``__init__`` signatures short while staying
strongly typed.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from odag_provisioner.enums import EnumTransportType


class ModelOdagErrorContext(BaseModel):
    """Structured context attached to provisioner errors.

    Attributes:
        transport_type: Transport the failing call used (HTTP, WEBSOCKET, LOCAL)
        operation: Operation being performed (validate_application, open_doc, ...)
        target_name: Remote subsystem or resource name
        correlation_id: Request correlation ID for tracing

    Example:
        >>> context = ModelOdagErrorContext(
        ...     transport_type=EnumTransportType.HTTP,
        ...     operation="create_link",
        ...     target_name="odag-link-service",
        ...     correlation_id=uuid4(),
        ... )
        >>> raise LinkRemoteServerError("Server Error", context=context)
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    transport_type: EnumTransportType | None = Field(
        default=None,
        description="Transport used by the failing call",
    )
    operation: str | None = Field(
        default=None,
        description="Operation being performed",
    )
    target_name: str | None = Field(
        default=None,
        description="Remote subsystem or resource name",
    )
    correlation_id: UUID | None = Field(
        default=None,
        description="Request correlation ID for tracing",
    )


__all__: list[str] = ["ModelOdagErrorContext"]
