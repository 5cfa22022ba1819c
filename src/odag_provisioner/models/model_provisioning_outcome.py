# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Provisioning outcome discriminated union."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, TypeAdapter

from odag_provisioner.models.model_provisioning_failure import (
    ModelProvisioningFailure,
)
from odag_provisioner.models.model_provisioning_partial_success import (
    ModelProvisioningPartialSuccess,
)
from odag_provisioner.models.model_provisioning_success import (
    ModelProvisioningSuccess,
)

ProvisioningOutcome = Annotated[
    ModelProvisioningSuccess
    | ModelProvisioningPartialSuccess
    | ModelProvisioningFailure,
    Field(discriminator="status"),
]

PROVISIONING_OUTCOME_ADAPTER: TypeAdapter[ProvisioningOutcome] = TypeAdapter(
    ProvisioningOutcome
)


__all__: list[str] = ["PROVISIONING_OUTCOME_ADAPTER", "ProvisioningOutcome"]
