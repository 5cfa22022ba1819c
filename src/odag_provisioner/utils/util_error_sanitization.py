# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Response-body sanitization for error context and logs.

Remote error bodies can echo request material back, including the
anti-forgery token passed as a query parameter or the impersonation header.
Snippets are checked against known sensitive markers before they are placed
in error context or logs.

Example:
    >>> sanitize_error_string("bad request for ?xrfkey=abcdEFGH12345678")
    '[REDACTED - potentially sensitive data]'
    >>> sanitize_error_string("Invalid rowEstExpr")
    'Invalid rowEstExpr'
"""

from __future__ import annotations

# Checked case-insensitively against the snippet.
SENSITIVE_PATTERNS: tuple[str, ...] = (
    # Anti-forgery token
    "xrfkey",
    "x-qlik-xrfkey",
    # Impersonation header
    "x-qlik-user",
    "userdirectory=",
    # Generic credentials
    "password",
    "secret",
    "token",
    "bearer",
    "authorization",
    "cookie",
    # Certificate and key material
    "-----begin",
    "-----end",
    "private key",
)


def sanitize_error_string(error_str: str, max_length: int = 500) -> str:
    """Sanitize a raw error string for safe inclusion in logs and error context.

    Args:
        error_str: The string to sanitize
        max_length: Maximum length of the sanitized string (default 500)

    Returns:
        The string unchanged, truncated, or replaced by a redaction marker.
    """
    if not error_str:
        return ""

    error_lower = error_str.lower()
    for pattern in SENSITIVE_PATTERNS:
        if pattern in error_lower:
            return "[REDACTED - potentially sensitive data]"

    if len(error_str) > max_length:
        return error_str[:max_length] + "... [truncated]"

    return error_str


__all__: list[str] = [
    "SENSITIVE_PATTERNS",
    "sanitize_error_string",
]
