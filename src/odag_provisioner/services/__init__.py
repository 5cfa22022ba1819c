# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Provisioning services."""

from odag_provisioner.services.service_odag_provisioner import ServiceOdagProvisioner

__all__: list[str] = ["ServiceOdagProvisioner"]
