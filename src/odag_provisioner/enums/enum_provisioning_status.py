# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Provisioning outcome status enumeration."""

from enum import Enum


class EnumProvisioningStatus(str, Enum):
    """Discriminator for provisioning outcomes.

    Attributes:
        SUCCESS: Link created and navigation object registered.
        PARTIAL_SUCCESS: Link created, navigation registration failed.
        FAILURE: Nothing was created.
    """

    SUCCESS = "success"
    PARTIAL_SUCCESS = "partial_success"
    FAILURE = "failure"


__all__: list[str] = ["EnumProvisioningStatus"]
