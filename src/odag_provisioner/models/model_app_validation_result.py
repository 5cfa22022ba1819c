# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Application validation result model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelAppValidationResult(BaseModel):
    """Outcome of resolving one application ID against the repository API.

    A missing application is an expected outcome and is reported here with
    ``valid=False`` and a ``reason``, never raised.

    Attributes:
        valid: Whether the ID resolved to an existing application
        app_id: The ID that was looked up
        name: Resolved application name (valid results only)
        resolved_id: ID echoed by the repository (valid results only)
        published: Whether the application is published (valid results only)
        reason: Why the ID did not resolve (invalid results only)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    valid: bool
    app_id: str
    name: str | None = None
    resolved_id: str | None = None
    published: bool | None = None
    reason: str | None = Field(default=None)

    @classmethod
    def not_found(cls, app_id: str, reason: str | None = None) -> ModelAppValidationResult:
        """Build the invalid result for an ID that did not resolve."""
        return cls(valid=False, app_id=app_id, reason=reason or f"App ID not found: {app_id}")


__all__: list[str] = ["ModelAppValidationResult"]
