# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Created ODAG link resource model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelLinkResource(BaseModel):
    """A link resource created by the link service.

    The remote system owns the resource once created; the provisioner never
    deletes it, including when a later step fails.

    Attributes:
        link_id: Server-issued identifier
        name: Link name echoed by the server, when present
        body: Normalized response body the identifier was read from
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    link_id: str = Field(min_length=1)
    name: str | None = None
    body: dict[str, object] = Field(default_factory=dict)


__all__: list[str] = ["ModelLinkResource"]
