# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Row-estimation bounds policy block for an ODAG link."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from odag_provisioner.models.constants_link_policy import (
    DEFAULT_POLICY_CONTEXT,
    DEFAULT_ROW_ESTIMATION_HIGH_BOUND,
    DEFAULT_ROW_ESTIMATION_LOW_BOUND,
)


class ModelRowEstimationRange(BaseModel):
    """Inclusive row-count bounds that gate app generation for a user context.

    Serializes to the wire shape ``{"context", "lowBound", "highBound"}`` via
    ``model_dump(by_alias=True)``.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    context: str = Field(
        default=DEFAULT_POLICY_CONTEXT,
        min_length=1,
        description="User context pattern the bounds apply to",
    )
    low_bound: int = Field(
        default=DEFAULT_ROW_ESTIMATION_LOW_BOUND,
        ge=0,
        alias="lowBound",
    )
    high_bound: int = Field(
        default=DEFAULT_ROW_ESTIMATION_HIGH_BOUND,
        ge=0,
        alias="highBound",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> ModelRowEstimationRange:
        if self.low_bound > self.high_bound:
            raise ValueError("lowBound must not exceed highBound")
        return self


__all__: list[str] = ["ModelRowEstimationRange"]
