# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for HandlerEngineNavigation.

Tests cover the OpenDoc -> CreateObject -> DoSave exchange, handle
threading, failure paths and the expression check, with scripted sockets
injected through the connector.
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from odag_provisioner.errors import (
    EngineConnectionClosedError,
    EngineConnectionTimeoutError,
    EngineProtocolDecodeError,
    EngineRemoteError,
)
from odag_provisioner.handlers import HandlerEngineNavigation
from odag_provisioner.models import ModelOdagProvisionerConfig
from odag_provisioner.security import IdentityContext
from tests.helpers.engine_doubles import (
    HangingConnector,
    PeerClose,
    ScriptedConnector,
    ScriptedEngineSocket,
    successful_navigation_script,
)


class TestRegisterNavigationLink:
    """Tests for the navigation registration exchange."""

    @pytest.mark.asyncio
    async def test_handle_threaded_through_exchange(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        socket = ScriptedEngineSocket(successful_navigation_script(app_handle=7))
        connector = ScriptedConnector(socket)
        navigation = HandlerEngineNavigation(config, identity, connector=connector)

        registration = await navigation.register_navigation_link(
            "sel-app", "link-42", correlation_id=uuid4()
        )

        assert registration.app_handle == 7
        assert registration.link_id == "link-42"
        assert registration.object_id == "nav-object-1"
        assert registration.method == "CreateObject"

        open_doc, create_object, do_save = socket.sent
        assert open_doc == {
            "handle": -1,
            "method": "OpenDoc",
            "params": ["sel-app"],
            "jsonrpc": "2.0",
            "id": 1,
        }
        assert create_object == {
            "handle": 7,
            "method": "CreateObject",
            "params": {
                "qProp": {
                    "qInfo": {"qType": "odagapplink"},
                    "qMetaDef": {"odagLinkRef": "link-42"},
                }
            },
            "jsonrpc": "2.0",
            "id": 2,
        }
        assert do_save == {
            "handle": 7,
            "method": "DoSave",
            "params": [],
            "jsonrpc": "2.0",
            "id": 3,
        }
        assert socket.close_calls == [(1000, "")]

    @pytest.mark.asyncio
    async def test_connects_with_identity(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        connector = ScriptedConnector(
            ScriptedEngineSocket(successful_navigation_script())
        )
        navigation = HandlerEngineNavigation(config, identity, connector=connector)

        await navigation.register_navigation_link("sel-app", "link-1")

        url, headers = connector.calls[0]
        assert url == "wss://qlik.example.com:4747/app/sel-app"
        assert headers == identity.headers()

    @pytest.mark.asyncio
    async def test_error_on_create_object_never_saves(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        socket = ScriptedEngineSocket(
            [
                {"result": {"qReturn": {"qHandle": 3}}},
                {"error": {"code": 5, "message": "Object creation denied"}},
                {"result": {}},
            ]
        )
        navigation = HandlerEngineNavigation(
            config, identity, connector=ScriptedConnector(socket)
        )

        with pytest.raises(EngineRemoteError) as exc_info:
            await navigation.register_navigation_link("sel-app", "link-1")

        assert exc_info.value.message == "Object creation denied"
        assert socket.sent_methods == ["OpenDoc", "CreateObject"]
        assert len(socket.close_calls) == 1
        assert socket.close_calls[0][0] != 1000

    @pytest.mark.asyncio
    async def test_missing_handle_is_decode_error(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        socket = ScriptedEngineSocket([{"result": {"qReturn": {}}}])
        navigation = HandlerEngineNavigation(
            config, identity, connector=ScriptedConnector(socket)
        )

        with pytest.raises(EngineProtocolDecodeError, match="qHandle"):
            await navigation.register_navigation_link("sel-app", "link-1")
        assert socket.sent_methods == ["OpenDoc"]
        assert socket.close_calls == [(1007, "Undecodable frame")]

    @pytest.mark.asyncio
    async def test_premature_close(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        socket = ScriptedEngineSocket(
            [{"result": {"qReturn": {"qHandle": 1}}}, PeerClose(1006)]
        )
        navigation = HandlerEngineNavigation(
            config, identity, connector=ScriptedConnector(socket)
        )

        with pytest.raises(EngineConnectionClosedError) as exc_info:
            await navigation.register_navigation_link("sel-app", "link-1")
        assert exc_info.value.close_code == 1006

    @pytest.mark.asyncio
    async def test_connect_timeout(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        connector = HangingConnector()
        navigation = HandlerEngineNavigation(config, identity, connector=connector)

        with pytest.raises(EngineConnectionTimeoutError) as exc_info:
            await navigation.register_navigation_link("sel-app", "link-1")
        assert exc_info.value.timeout_seconds == config.engine_connect_timeout_seconds
        assert connector.calls == 1

    @pytest.mark.asyncio
    async def test_sessions_are_independent(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        first = ScriptedEngineSocket(successful_navigation_script(app_handle=4))
        second = ScriptedEngineSocket(successful_navigation_script(app_handle=9))
        navigation = HandlerEngineNavigation(
            config, identity, connector=ScriptedConnector(first, second)
        )

        one = await navigation.register_navigation_link("sel-app", "link-1")
        two = await navigation.register_navigation_link("sel-app", "link-2")

        assert (one.app_handle, two.app_handle) == (4, 9)
        assert [frame["id"] for frame in second.sent] == [1, 2, 3]


class TestCheckExpression:
    """Tests for the engine-side expression check."""

    @pytest.mark.asyncio
    async def test_valid_expression(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        socket = ScriptedEngineSocket(
            [{"result": {"qReturn": {"qHandle": 2}}}, {"result": {"qErrorMsg": ""}}]
        )
        navigation = HandlerEngineNavigation(
            config, identity, connector=ScriptedConnector(socket)
        )

        result = await navigation.check_expression("tpl", "Count(OrderID)")

        assert result.valid is True
        assert result.error_message is None
        assert socket.sent[1]["handle"] == 2
        assert socket.sent[1]["method"] == "CheckExpression"
        assert socket.sent[1]["params"] == ["Count(OrderID)"]

    @pytest.mark.asyncio
    async def test_engine_reported_error_message(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        socket = ScriptedEngineSocket(
            [
                {"result": {"qReturn": {"qHandle": 2}}},
                {"result": {"qErrorMsg": "Bad field name: OrderIDX"}},
            ]
        )
        navigation = HandlerEngineNavigation(
            config, identity, connector=ScriptedConnector(socket)
        )

        result = await navigation.check_expression("tpl", "Count(OrderIDX)")

        assert result.valid is False
        assert result.error_message == "Bad field name: OrderIDX"

    @pytest.mark.asyncio
    async def test_remote_error_is_invalid(
        self, config: ModelOdagProvisionerConfig, identity: IdentityContext
    ) -> None:
        socket = ScriptedEngineSocket(
            [{"error": {"code": 1002, "message": "App not found"}}]
        )
        navigation = HandlerEngineNavigation(
            config, identity, connector=ScriptedConnector(socket)
        )

        result = await navigation.check_expression("missing", "1")

        assert result.valid is False
        assert result.error_message == "App not found"
