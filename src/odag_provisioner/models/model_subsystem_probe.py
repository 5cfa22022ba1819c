# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Per-subsystem reachability probe result."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ModelSubsystemProbe(BaseModel):
    """Reachability of one remote subsystem.

    Attributes:
        name: Subsystem name ("repository_api", "link_service")
        reachable: Whether a 2xx response came back
        status_code: HTTP status, when a response was received
        error: Sanitized failure description, when unreachable
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    reachable: bool
    status_code: int | None = None
    error: str | None = None


__all__: list[str] = ["ModelSubsystemProbe"]
