# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Failed provisioning outcome; nothing was created remotely."""

from __future__ import annotations

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from odag_provisioner.enums import EnumProvisioningPhase, EnumProvisioningStatus


class ModelProvisioningFailure(BaseModel):
    """Provisioning aborted before the link resource existed.

    Attributes:
        error: Human-readable error message
        error_type: Class name of the error that aborted the request
        error_code: Error code string of that error, when it had one
        failed_phase: Lifecycle phase the request was in
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: Literal[EnumProvisioningStatus.FAILURE] = EnumProvisioningStatus.FAILURE
    error: str
    error_type: str
    error_code: str | None = None
    failed_phase: EnumProvisioningPhase
    correlation_id: UUID | None = Field(default=None)

    @property
    def success(self) -> bool:
        return False

    def to_response(self) -> dict[str, object]:
        """Caller-visible record."""
        return {"success": False, "error": self.error}


__all__: list[str] = ["ModelProvisioningFailure"]
