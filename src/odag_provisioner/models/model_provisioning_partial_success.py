# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Partial-success provisioning outcome.

Produced when the link resource was durably created but registering the
navigation object failed. The link ID is always carried so the caller can
finish the registration by hand.
"""

from __future__ import annotations

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from odag_provisioner.enums import EnumProvisioningStatus


def build_manual_steps(link_id: str, link_name: str) -> tuple[str, ...]:
    """Remediation steps for registering the navigation link by hand."""
    return (
        "1. Open the selection app in Qlik Sense Hub",
        "2. Go to app settings or navigation",
        f"3. Add navigation link with ID: {link_id}",
        f"4. Set link name: {link_name}",
    )


class ModelProvisioningPartialSuccess(BaseModel):
    """Link created; navigation registration must be completed manually."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: Literal[EnumProvisioningStatus.PARTIAL_SUCCESS] = (
        EnumProvisioningStatus.PARTIAL_SUCCESS
    )
    link_id: str
    selection_app_id: str
    template_app_id: str
    selection_app_name: str | None = None
    template_app_name: str | None = None
    navigation_error: str
    manual_steps: tuple[str, ...] = Field(min_length=1)
    correlation_id: UUID | None = Field(default=None)

    @property
    def success(self) -> bool:
        return True

    def to_response(self) -> dict[str, object]:
        """Caller-visible record; ``success`` stays true because the link exists."""
        return {
            "success": True,
            "partial": True,
            "odagLinkId": self.link_id,
            "selectionAppId": self.selection_app_id,
            "templateAppId": self.template_app_id,
            "selectionAppName": self.selection_app_name,
            "templateAppName": self.template_app_name,
            "message": (
                "ODAG link created successfully. "
                "Navigation link must be added manually."
            ),
            "navigationLinkError": self.navigation_error,
            "manualSteps": list(self.manual_steps),
        }


__all__: list[str] = ["ModelProvisioningPartialSuccess", "build_manual_steps"]
