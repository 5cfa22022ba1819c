# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Successful provisioning outcome."""

from __future__ import annotations

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from odag_provisioner.enums import EnumProvisioningStatus
from odag_provisioner.models.model_navigation_registration import (
    NAVIGATION_LINK_METHOD,
)


class ModelProvisioningSuccess(BaseModel):
    """Link created and navigation object registered in the selection app."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: Literal[EnumProvisioningStatus.SUCCESS] = EnumProvisioningStatus.SUCCESS
    link_id: str
    selection_app_id: str
    template_app_id: str
    selection_app_name: str | None = None
    template_app_name: str | None = None
    navigation_link_method: str = NAVIGATION_LINK_METHOD
    correlation_id: UUID | None = Field(default=None)

    @property
    def success(self) -> bool:
        return True

    def to_response(self) -> dict[str, object]:
        """Caller-visible record."""
        return {
            "success": True,
            "odagLinkId": self.link_id,
            "selectionAppId": self.selection_app_id,
            "templateAppId": self.template_app_id,
            "selectionAppName": self.selection_app_name,
            "templateAppName": self.template_app_name,
            "navigationLinkMethod": self.navigation_link_method,
            "message": "ODAG link created and registered in Hub successfully",
        }


__all__: list[str] = ["ModelProvisioningSuccess"]
