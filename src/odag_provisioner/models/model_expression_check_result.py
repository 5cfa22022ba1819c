# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Engine expression check result."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ModelExpressionCheckResult(BaseModel):
    """Whether an expression is valid inside an application.

    Attributes:
        app_id: Application the expression was checked against
        expression: The expression text
        valid: True when the engine reported no error
        error_message: Engine error text, when invalid
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    app_id: str
    expression: str
    valid: bool
    error_message: str | None = None


__all__: list[str] = ["ModelExpressionCheckResult"]
