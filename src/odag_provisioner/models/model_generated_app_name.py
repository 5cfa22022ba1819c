# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Generated-app name template policy block for an ODAG link."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from odag_provisioner.models.constants_link_policy import DEFAULT_POLICY_CONTEXT


class ModelGeneratedAppName(BaseModel):
    """Name template for generated apps.

    ``format_string`` may contain engine substitution tokens such as
    ``$(user.name)`` and ``$(=Now())``; they are passed through untouched.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    context: str = Field(default=DEFAULT_POLICY_CONTEXT, min_length=1)
    format_string: str = Field(min_length=1, alias="formatString")


__all__: list[str] = ["ModelGeneratedAppName"]
