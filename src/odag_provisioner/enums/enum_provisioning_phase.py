# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Provisioning request lifecycle phases.

FSM Diagram::

    received -> authenticating -> validating_apps -> creating_link
             -> registering_navigation -> done
"""

from enum import Enum


class EnumProvisioningPhase(str, Enum):
    """Phases a provisioning request moves through.

    Attributes:
        RECEIVED: Request accepted; required fields being checked.
        AUTHENTICATING: Identity being established against the repository API.
        VALIDATING_APPS: Selection and template apps being resolved.
        CREATING_LINK: Link resource creation call in flight.
        REGISTERING_NAVIGATION: Engine session registering the navigation object.
        DONE: Outcome produced.
    """

    RECEIVED = "received"
    AUTHENTICATING = "authenticating"
    VALIDATING_APPS = "validating_apps"
    CREATING_LINK = "creating_link"
    REGISTERING_NAVIGATION = "registering_navigation"
    DONE = "done"


__all__: list[str] = ["EnumProvisioningPhase"]
