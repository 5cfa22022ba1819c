# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Outbound identity: mutual-TLS material, impersonation and xrf token."""

from odag_provisioner.security.identity_context import (
    CLIENT_CERT_FILE,
    CLIENT_KEY_FILE,
    ROOT_CA_FILE,
    USER_HEADER,
    XRF_KEY_HEADER,
    XRF_KEY_LENGTH,
    XRF_KEY_QUERY_PARAM,
    IdentityContext,
    generate_xrf_key,
    load_client_ssl_context,
)

__all__: list[str] = [
    "CLIENT_CERT_FILE",
    "CLIENT_KEY_FILE",
    "ROOT_CA_FILE",
    "USER_HEADER",
    "XRF_KEY_HEADER",
    "XRF_KEY_LENGTH",
    "XRF_KEY_QUERY_PARAM",
    "IdentityContext",
    "generate_xrf_key",
    "load_client_ssl_context",
]
