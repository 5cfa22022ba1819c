# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Default values for ODAG link policy blocks."""

from __future__ import annotations

DEFAULT_POLICY_CONTEXT: str = "User_*"

DEFAULT_ROW_ESTIMATION_LOW_BOUND: int = 1
DEFAULT_ROW_ESTIMATION_HIGH_BOUND: int = 500000

# 7 days
DEFAULT_APP_RETENTION_MINUTES: int = 10080

# Engine-side substitution tokens for the requesting user and the current time.
GENERATED_APP_NAME_SUFFIX: str = " - $(user.name) - $(=Now())"


def default_generated_app_name(link_name: str) -> str:
    """Generated-app name template derived from the link name."""
    return f"{link_name}{GENERATED_APP_NAME_SUFFIX}"


__all__: list[str] = [
    "DEFAULT_APP_RETENTION_MINUTES",
    "DEFAULT_POLICY_CONTEXT",
    "DEFAULT_ROW_ESTIMATION_HIGH_BOUND",
    "DEFAULT_ROW_ESTIMATION_LOW_BOUND",
    "GENERATED_APP_NAME_SUFFIX",
    "default_generated_app_name",
]
