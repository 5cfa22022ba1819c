# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ODAG Provisioner Enumerations Module.

Exports:
    EnumApplicationRole: Selection or template role of an application
    EnumEngineSessionState: Engine JSON-RPC session FSM states
    EnumProvisioningPhase: Provisioning request lifecycle phases
    EnumProvisioningStatus: Outcome discriminator (success, partial, failure)
    EnumTransportType: Transport used for a remote call
"""

from odag_provisioner.enums.enum_application_role import EnumApplicationRole
from odag_provisioner.enums.enum_engine_session_state import EnumEngineSessionState
from odag_provisioner.enums.enum_provisioning_phase import EnumProvisioningPhase
from odag_provisioner.enums.enum_provisioning_status import EnumProvisioningStatus
from odag_provisioner.enums.enum_transport_type import EnumTransportType

__all__: list[str] = [
    "EnumApplicationRole",
    "EnumEngineSessionState",
    "EnumProvisioningPhase",
    "EnumProvisioningStatus",
    "EnumTransportType",
]
