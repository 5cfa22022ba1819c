# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Shared pytest configuration for all unit tests.

This conftest.py automatically applies the `unit` marker to all tests
in the tests/unit/ directory hierarchy and provides the configuration and
identity fixtures the handler and service tests share.

NOTE: pytestmark at module-level in conftest.py does NOT automatically
apply to tests in other files. We use pytest_collection_modifyitems hook
instead to dynamically mark all tests in the unit directory.

This enables selective test execution:
    # Run only unit tests
    pytest -m unit
"""

from __future__ import annotations

import ssl

import pytest

from odag_provisioner.models import ModelOdagProvisionerConfig
from odag_provisioner.security import IdentityContext

TEST_XRF_KEY = "abcdEFGH12345678"


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Dynamically add unit marker to all tests in the unit directory."""
    unit_marker = pytest.mark.unit

    for item in items:
        if "tests/unit" in str(item.fspath):
            if not any(marker.name == "unit" for marker in item.iter_markers()):
                item.add_marker(unit_marker)


@pytest.fixture
def config() -> ModelOdagProvisionerConfig:
    """Configuration pointing at a fictitious platform host."""
    return ModelOdagProvisionerConfig(
        host="qlik.example.com",
        certs_path="/nonexistent/certs",
        user_directory="INTERNAL",
        user_id="sa_repository",
        engine_connect_timeout_seconds=0.2,
        engine_read_timeout_seconds=0.2,
    )


@pytest.fixture
def identity() -> IdentityContext:
    """Identity context with a fixed token and an unloaded SSL context."""
    return IdentityContext(
        ssl_context=ssl.create_default_context(),
        user_directory="INTERNAL",
        user_id="sa_repository",
        xrf_key=TEST_XRF_KEY,
    )
