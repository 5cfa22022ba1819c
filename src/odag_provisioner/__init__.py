# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ODAG Provisioner - on-demand app generation link provisioning.

This package creates on-demand app generation (ODAG) links on a remote
analytics platform and registers them as navigation objects inside the
selection app:

- Identity context: mutual TLS, impersonation headers, anti-forgery token
- Resource API handler: repository API and link service over HTTPS
- Engine navigation handler: JSON-RPC over WebSocket
- Provisioning service: success, partial success or failure outcomes

Key Components:
    - ServiceOdagProvisioner: entry point for provisioning and diagnostics
    - ModelOdagProvisionerConfig: configuration from env or YAML
    - OdagRuntimeError: base of the typed error hierarchy
"""

__all__: list[str] = []
