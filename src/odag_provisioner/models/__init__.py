# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ODAG Provisioner Models Module.

Pydantic models for configuration, the request record, intermediate
results of each remote call, and the terminal provisioning outcome.
"""

from odag_provisioner.models.model_app_retention_time import ModelAppRetentionTime
from odag_provisioner.models.model_app_validation_result import (
    ModelAppValidationResult,
)
from odag_provisioner.models.model_authenticated_session import (
    ModelAuthenticatedSession,
)
from odag_provisioner.models.model_connection_report import ModelConnectionReport
from odag_provisioner.models.model_expression_check_result import (
    ModelExpressionCheckResult,
)
from odag_provisioner.models.model_generated_app_name import ModelGeneratedAppName
from odag_provisioner.models.model_link_request import (
    REQUIRED_REQUEST_FIELDS,
    ModelLinkRequest,
)
from odag_provisioner.models.model_link_resource import ModelLinkResource
from odag_provisioner.models.model_navigation_registration import (
    NAVIGATION_LINK_METHOD,
    ModelNavigationRegistration,
)
from odag_provisioner.models.model_odag_provisioner_config import (
    ModelOdagProvisionerConfig,
)
from odag_provisioner.models.model_provisioning_failure import (
    ModelProvisioningFailure,
)
from odag_provisioner.models.model_provisioning_outcome import (
    PROVISIONING_OUTCOME_ADAPTER,
    ProvisioningOutcome,
)
from odag_provisioner.models.model_provisioning_partial_success import (
    ModelProvisioningPartialSuccess,
    build_manual_steps,
)
from odag_provisioner.models.model_provisioning_success import (
    ModelProvisioningSuccess,
)
from odag_provisioner.models.model_row_estimation_range import (
    ModelRowEstimationRange,
)
from odag_provisioner.models.model_subsystem_probe import ModelSubsystemProbe

__all__: list[str] = [
    "NAVIGATION_LINK_METHOD",
    "PROVISIONING_OUTCOME_ADAPTER",
    "REQUIRED_REQUEST_FIELDS",
    "ModelAppRetentionTime",
    "ModelAppValidationResult",
    "ModelAuthenticatedSession",
    "ModelConnectionReport",
    "ModelExpressionCheckResult",
    "ModelGeneratedAppName",
    "ModelLinkRequest",
    "ModelLinkResource",
    "ModelNavigationRegistration",
    "ModelOdagProvisionerConfig",
    "ModelProvisioningFailure",
    "ModelProvisioningPartialSuccess",
    "ModelProvisioningSuccess",
    "ModelRowEstimationRange",
    "ModelSubsystemProbe",
    "ProvisioningOutcome",
    "build_manual_steps",
]
