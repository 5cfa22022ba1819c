# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Command-line interface."""

from odag_provisioner.cli.commands import cli, configure_logging

__all__: list[str] = ["cli", "configure_logging"]
