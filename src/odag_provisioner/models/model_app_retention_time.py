# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Generated-app retention policy block for an ODAG link."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from odag_provisioner.models.constants_link_policy import (
    DEFAULT_APP_RETENTION_MINUTES,
    DEFAULT_POLICY_CONTEXT,
)


class ModelAppRetentionTime(BaseModel):
    """How long generated apps are kept for a user context, in minutes."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    context: str = Field(default=DEFAULT_POLICY_CONTEXT, min_length=1)
    minutes: int = Field(default=DEFAULT_APP_RETENTION_MINUTES, gt=0)


__all__: list[str] = ["ModelAppRetentionTime"]
