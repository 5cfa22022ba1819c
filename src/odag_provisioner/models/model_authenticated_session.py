# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Authenticated session model.

Produced once per provisioner instance by the initial repository probe and
owned by the provisioner; handlers never hold ambient authentication flags.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ModelAuthenticatedSession(BaseModel):
    """Proof that the identity was accepted by the repository API.

    Attributes:
        authenticated_at: When the probe succeeded (UTC)
        server_version: Build version reported by the repository, if any
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    authenticated_at: datetime
    server_version: str | None = None


__all__: list[str] = ["ModelAuthenticatedSession"]
