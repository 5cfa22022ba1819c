# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Utility helpers for the ODAG provisioner."""

from odag_provisioner.utils.util_error_sanitization import (
    SENSITIVE_PATTERNS,
    sanitize_error_string,
)

__all__: list[str] = [
    "SENSITIVE_PATTERNS",
    "sanitize_error_string",
]
