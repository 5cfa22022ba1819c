# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Application role enumeration for ODAG link endpoints."""

from enum import Enum


class EnumApplicationRole(str, Enum):
    """Role an application plays in an ODAG link.

    Attributes:
        SELECTION: The app users interact with; receives the navigation object.
        TEMPLATE: The app cloned when generation is triggered.
    """

    SELECTION = "selection"
    TEMPLATE = "template"


__all__: list[str] = ["EnumApplicationRole"]
