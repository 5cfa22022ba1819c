# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Tests for the provisioning outcome models and their caller-visible records."""

from __future__ import annotations

from odag_provisioner.enums import EnumProvisioningPhase, EnumProvisioningStatus
from odag_provisioner.models import (
    PROVISIONING_OUTCOME_ADAPTER,
    ModelConnectionReport,
    ModelProvisioningFailure,
    ModelProvisioningPartialSuccess,
    ModelProvisioningSuccess,
    ModelSubsystemProbe,
    build_manual_steps,
)


class TestProvisioningOutcomes:
    """Tests for Success, PartialSuccess and Failure."""

    def test_success_response(self) -> None:
        outcome = ModelProvisioningSuccess(
            link_id="link-1",
            selection_app_id="sel",
            template_app_id="tpl",
            selection_app_name="Sales",
            template_app_name="Sales detail",
        )
        response = outcome.to_response()

        assert outcome.success is True
        assert response["success"] is True
        assert response["odagLinkId"] == "link-1"
        assert response["navigationLinkMethod"] == "CreateObject"
        assert response["selectionAppName"] == "Sales"

    def test_partial_success_response(self) -> None:
        outcome = ModelProvisioningPartialSuccess(
            link_id="link-1",
            selection_app_id="sel",
            template_app_id="tpl",
            navigation_error="WebSocket closed with code 1006: ",
            manual_steps=build_manual_steps("link-1", "Sales"),
        )
        response = outcome.to_response()

        assert response["success"] is True
        assert response["partial"] is True
        assert response["odagLinkId"] == "link-1"
        assert response["navigationLinkError"] == "WebSocket closed with code 1006: "
        assert response["manualSteps"] == [
            "1. Open the selection app in Qlik Sense Hub",
            "2. Go to app settings or navigation",
            "3. Add navigation link with ID: link-1",
            "4. Set link name: Sales",
        ]

    def test_failure_response(self) -> None:
        outcome = ModelProvisioningFailure(
            error="Missing required field: linkName",
            error_type="MissingFieldError",
            failed_phase=EnumProvisioningPhase.RECEIVED,
        )
        assert outcome.success is False
        assert outcome.to_response() == {
            "success": False,
            "error": "Missing required field: linkName",
        }

    def test_discriminated_union_round_trip(self) -> None:
        outcome = PROVISIONING_OUTCOME_ADAPTER.validate_python(
            {
                "status": "failure",
                "error": "boom",
                "error_type": "LinkRemoteServerError",
                "failed_phase": "creating_link",
            }
        )
        assert isinstance(outcome, ModelProvisioningFailure)
        assert outcome.status == EnumProvisioningStatus.FAILURE
        assert outcome.failed_phase == EnumProvisioningPhase.CREATING_LINK


class TestConnectionReport:
    """Tests for the diagnostic report."""

    def test_failure_shape(self) -> None:
        report = ModelConnectionReport(success=False, error="Authentication failed")
        assert report.to_response() == {
            "success": False,
            "error": "Authentication failed",
        }

    def test_success_includes_probes(self) -> None:
        report = ModelConnectionReport(
            success=True,
            authenticated=True,
            server_version="14.173.4",
            probes=(
                ModelSubsystemProbe(name="repository_api", reachable=True, status_code=200),
                ModelSubsystemProbe(name="link_service", reachable=False, error="HTTP 404"),
            ),
        )
        response = report.to_response()

        assert response["success"] is True
        assert response["authentication"] == "successful"
        assert response["serverVersion"] == "14.173.4"
        assert response["link_service"] == {
            "reachable": False,
            "statusCode": None,
            "error": "HTTP 404",
        }
