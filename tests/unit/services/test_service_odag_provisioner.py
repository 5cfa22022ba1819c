# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for ServiceOdagProvisioner.

Tests cover the provisioning lifecycle end to end against an in-memory
platform and scripted engine sockets:
- Success, failure and partial-success outcomes
- Authentication happening once per service instance
- The connection diagnostic never raising
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import httpx
import pytest

from odag_provisioner.enums import EnumProvisioningPhase, EnumProvisioningStatus
from odag_provisioner.handlers import HandlerEngineNavigation, HandlerResourceApi
from odag_provisioner.models import (
    ModelOdagProvisionerConfig,
    ModelProvisioningFailure,
    ModelProvisioningPartialSuccess,
    ModelProvisioningSuccess,
)
from odag_provisioner.security import IdentityContext
from odag_provisioner.services import ServiceOdagProvisioner
from tests.helpers.engine_doubles import (
    PeerClose,
    ScriptedConnector,
    ScriptedEngineSocket,
    successful_navigation_script,
)
from tests.helpers.platform_doubles import FakePlatform

REQUEST = {
    "linkName": "Sales detail",
    "selectionAppId": "sel-app",
    "templateAppId": "tpl-app",
    "rowEstExpr": "Count(OrderID)",
}
APPS = {"sel-app": "Sales overview", "tpl-app": "Sales detail template"}


def _provisioner(
    config: ModelOdagProvisionerConfig,
    identity: IdentityContext,
    platform: FakePlatform,
    *sockets: ScriptedEngineSocket,
    client: httpx.AsyncClient | None = None,
) -> tuple[ServiceOdagProvisioner, ScriptedConnector]:
    connector = ScriptedConnector(*sockets)
    service = ServiceOdagProvisioner(
        config,
        identity=identity,
        resource_api=HandlerResourceApi(
            config, identity, http_client=client or platform.client()
        ),
        navigation=HandlerEngineNavigation(config, identity, connector=connector),
    )
    return service, connector


class TestProvision:
    """Tests for the provisioning lifecycle."""

    @pytest.mark.asyncio
    async def test_success(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        platform = FakePlatform(apps=APPS)
        socket = ScriptedEngineSocket(successful_navigation_script())
        service, connector = _provisioner(config, identity, platform, socket)

        outcome = await service.provision(REQUEST)

        assert isinstance(outcome, ModelProvisioningSuccess)
        assert outcome.status == EnumProvisioningStatus.SUCCESS
        assert outcome.link_id == "link-1"
        assert outcome.selection_app_name == "Sales overview"
        assert outcome.template_app_name == "Sales detail template"
        response = outcome.to_response()
        assert response["success"] is True
        assert response["odagLinkId"] == "link-1"
        assert response["navigationLinkMethod"] == "CreateObject"

        assert connector.calls[0][0].endswith("/app/sel-app")
        assert socket.sent[1]["params"]["qProp"]["qMetaDef"] == {
            "odagLinkRef": "link-1"
        }

    @pytest.mark.asyncio
    async def test_unknown_template_creates_nothing(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        platform = FakePlatform(apps={"sel-app": "Sales overview"})
        service, connector = _provisioner(config, identity, platform)

        outcome = await service.provision(REQUEST)

        assert isinstance(outcome, ModelProvisioningFailure)
        assert outcome.failed_phase == EnumProvisioningPhase.VALIDATING_APPS
        assert outcome.error_type == "ApplicationNotFoundError"
        assert "tpl-app" in outcome.error
        assert platform.requests_to("/v1/links") == []
        assert connector.calls == []

    @pytest.mark.asyncio
    async def test_unknown_selection_creates_nothing(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        platform = FakePlatform(apps={"tpl-app": "Sales detail template"})
        service, connector = _provisioner(config, identity, platform)

        outcome = await service.provision(REQUEST)

        assert isinstance(outcome, ModelProvisioningFailure)
        assert outcome.failed_phase == EnumProvisioningPhase.VALIDATING_APPS
        assert outcome.error_type == "ApplicationNotFoundError"
        assert "sel-app" in outcome.error
        assert platform.requests_to("/v1/links") == []
        assert platform.requests_to("/qrs/app/tpl-app") == []
        assert len(platform.requests_to("/qrs/app/sel-app")) == 1
        assert connector.calls == []

    @pytest.mark.asyncio
    async def test_lookup_escaping_cannot_validate_another_app(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        platform = FakePlatform(apps=APPS)
        service, _ = _provisioner(config, identity, platform)

        outcome = await service.provision(
            {**REQUEST, "selectionAppId": "nope/../sel-app"}
        )

        assert isinstance(outcome, ModelProvisioningFailure)
        assert outcome.failed_phase == EnumProvisioningPhase.VALIDATING_APPS
        assert platform.requests_to("/v1/links") == []

    @pytest.mark.asyncio
    async def test_missing_field_sends_nothing(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        platform = FakePlatform(apps=APPS)
        service, _ = _provisioner(config, identity, platform)
        request = {k: v for k, v in REQUEST.items() if k != "templateAppId"}

        outcome = await service.provision(request)

        assert isinstance(outcome, ModelProvisioningFailure)
        assert outcome.failed_phase == EnumProvisioningPhase.RECEIVED
        assert outcome.error == "Missing required field: templateAppId"
        assert outcome.to_response() == {
            "success": False,
            "error": "Missing required field: templateAppId",
        }
        assert platform.requests == []

    @pytest.mark.asyncio
    async def test_authentication_failure(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        platform = FakePlatform(apps=APPS, about_status=401)
        service, _ = _provisioner(config, identity, platform)

        outcome = await service.provision(REQUEST)

        assert isinstance(outcome, ModelProvisioningFailure)
        assert outcome.failed_phase == EnumProvisioningPhase.AUTHENTICATING
        assert outcome.error.startswith("Authentication failed")
        assert service.authenticated_session is None

    @pytest.mark.asyncio
    async def test_link_service_rejection(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        platform = FakePlatform(apps=APPS, link_status=403)
        service, connector = _provisioner(config, identity, platform)

        outcome = await service.provision(REQUEST)

        assert isinstance(outcome, ModelProvisioningFailure)
        assert outcome.failed_phase == EnumProvisioningPhase.CREATING_LINK
        assert outcome.error == "Forbidden: User may not have ODAG permissions"
        assert outcome.error_type == "LinkForbiddenError"
        assert connector.calls == []

    @pytest.mark.asyncio
    async def test_navigation_failure_is_partial_success(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        platform = FakePlatform(apps=APPS)
        socket = ScriptedEngineSocket(
            [
                {"result": {"qReturn": {"qHandle": 1}}},
                {"error": {"code": 5, "message": "Access denied"}},
            ]
        )
        service, _ = _provisioner(config, identity, platform, socket)

        outcome = await service.provision(REQUEST)

        assert isinstance(outcome, ModelProvisioningPartialSuccess)
        assert outcome.link_id == "link-1"
        assert outcome.navigation_error == "Access denied"
        assert any("link-1" in step for step in outcome.manual_steps)
        assert any("Sales detail" in step for step in outcome.manual_steps)
        response = outcome.to_response()
        assert response["success"] is True
        assert response["partial"] is True
        assert response["odagLinkId"] == "link-1"
        assert len(platform.created_links) == 1

    @pytest.mark.asyncio
    async def test_engine_closed_is_partial_success(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        platform = FakePlatform(apps=APPS)
        socket = ScriptedEngineSocket([PeerClose(1006)])
        service, _ = _provisioner(config, identity, platform, socket)

        outcome = await service.provision(REQUEST)

        assert isinstance(outcome, ModelProvisioningPartialSuccess)
        assert outcome.navigation_error.startswith("WebSocket closed with code 1006")

    @pytest.mark.asyncio
    async def test_sequential_requests_create_distinct_links(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        platform = FakePlatform(apps=APPS)
        service, _ = _provisioner(
            config,
            identity,
            platform,
            ScriptedEngineSocket(successful_navigation_script()),
            ScriptedEngineSocket(successful_navigation_script()),
        )

        first = await service.provision(REQUEST)
        second = await service.provision(REQUEST)

        assert isinstance(first, ModelProvisioningSuccess)
        assert isinstance(second, ModelProvisioningSuccess)
        assert (first.link_id, second.link_id) == ("link-1", "link-2")
        assert len([r for r in platform.requests if r.url.path.endswith("/about")]) == 1

    @pytest.mark.asyncio
    async def test_concurrent_first_requests_authenticate_once(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        platform = FakePlatform(apps=APPS)
        service, _ = _provisioner(
            config,
            identity,
            platform,
            *(ScriptedEngineSocket(successful_navigation_script()) for _ in range(3)),
        )

        outcomes = await asyncio.gather(*(service.provision(REQUEST) for _ in range(3)))

        assert all(isinstance(o, ModelProvisioningSuccess) for o in outcomes)
        assert sorted(o.link_id for o in outcomes) == ["link-1", "link-2", "link-3"]
        assert len([r for r in platform.requests if r.url.path.endswith("/about")]) == 1
        assert service.authenticated_session is not None
        assert service.authenticated_session.server_version == "14.173.4"


class TestConnectionDiagnostic:
    """Tests for test_connection."""

    @pytest.mark.asyncio
    async def test_all_reachable(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        platform = FakePlatform(apps=APPS)
        service, _ = _provisioner(config, identity, platform)

        report = await service.test_connection()

        assert report.success is True
        assert report.server_version == "14.173.4"
        assert [p.name for p in report.probes] == ["repository_api", "link_service"]
        assert all(p.reachable for p in report.probes)
        response = report.to_response()
        assert response["authentication"] == "successful"

    @pytest.mark.asyncio
    async def test_authentication_failure_never_raises(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        platform = FakePlatform(apps=APPS, about_status=500)
        service, _ = _provisioner(config, identity, platform)

        report = await service.test_connection()

        assert report.success is False
        assert report.error is not None
        assert report.error.startswith("Authentication failed")

    @pytest.mark.asyncio
    async def test_unreachable_link_service_is_reported(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        platform = FakePlatform(apps=APPS)

        def handle(request: httpx.Request) -> httpx.Response:
            if request.url.path.startswith("/v1/links"):
                raise httpx.ConnectError("connection refused", request=request)
            return platform.handle(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handle))
        service, _ = _provisioner(config, identity, platform, client=client)

        report = await service.test_connection()

        assert report.success is True
        repository, link_service = report.probes
        assert repository.reachable is True
        assert link_service.reachable is False
        assert link_service.error is not None


class TestLifecycle:
    """Tests for resource ownership."""

    @pytest.mark.asyncio
    async def test_context_manager_leaves_injected_client_open(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        platform = FakePlatform(apps=APPS)
        client = platform.client()
        service, _ = _provisioner(config, identity, platform, client=client)

        async with service:
            pass

        assert client.is_closed is False
        await client.aclose()


class TestUnexpectedNavigationFailure:
    """Tests for non-domain exceptions raised while registering navigation."""

    @pytest.mark.asyncio
    async def test_unexpected_error_still_reports_link(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        platform = FakePlatform(apps=APPS)
        navigation = AsyncMock(spec=HandlerEngineNavigation)
        navigation.register_navigation_link.side_effect = RuntimeError("boom")
        service = ServiceOdagProvisioner(
            config,
            identity=identity,
            resource_api=HandlerResourceApi(
                config, identity, http_client=platform.client()
            ),
            navigation=navigation,
        )

        outcome = await service.provision(REQUEST)

        assert isinstance(outcome, ModelProvisioningPartialSuccess)
        assert outcome.link_id == "link-1"
        assert outcome.navigation_error == "boom"
        navigation.register_navigation_link.assert_awaited_once()
        args = navigation.register_navigation_link.await_args.args
        assert args[:2] == ("sel-app", "link-1")
