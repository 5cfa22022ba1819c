# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Engine Navigation Handler - registers link navigation inside an app.

This handler drives the engine JSON-RPC exchange that makes a created link
visible from the selection app:

    1. ``OpenDoc [app_id]`` on the session root handle (-1)
    2. ``CreateObject`` on the returned app handle, with an ``odagapplink``
       object whose metadata references the link ID
    3. ``DoSave []`` on the same app handle
    4. Close the socket normally (1000)

Session States:
    CONNECTING -> APP_OPEN -> OBJECT_CREATED -> SAVED, or FAILED from any
    non-terminal state. The app handle from step 1 is only valid for the
    socket it was issued on; every session opens its own socket.

Transport:
    The default connector opens the socket with
    ``aiohttp.ClientSession.ws_connect`` using the identity's SSL context and
    headers. Tests inject a connector returning a scripted socket.

Coroutine Safety:
    The handler itself is stateless; each call opens and owns its session.
"""

from __future__ import annotations

import asyncio
import logging
import ssl
from collections.abc import Mapping
from typing import TYPE_CHECKING

import aiohttp

from odag_provisioner.enums import EnumEngineSessionState, EnumTransportType
from odag_provisioner.errors import (
    EngineConnectionError,
    EngineConnectionTimeoutError,
    EngineProtocolDecodeError,
    EngineRemoteError,
    ModelOdagErrorContext,
    NavigationRegistrationError,
)
from odag_provisioner.handlers.engine_rpc_session import (
    SESSION_ROOT_HANDLE,
    EngineRpcSession,
)
from odag_provisioner.models import (
    NAVIGATION_LINK_METHOD,
    ModelExpressionCheckResult,
    ModelNavigationRegistration,
)
from odag_provisioner.protocols import CLOSE_NORMAL, CLOSE_UNSUPPORTED_DATA
from odag_provisioner.utils import sanitize_error_string

if TYPE_CHECKING:
    from uuid import UUID

    from odag_provisioner.models import ModelOdagProvisionerConfig
    from odag_provisioner.protocols import ProtocolEngineConnector
    from odag_provisioner.security import IdentityContext

logger = logging.getLogger(__name__)

NAVIGATION_OBJECT_TYPE: str = "odagapplink"
_ENGINE_TARGET: str = "engine"


class AiohttpEngineSocket:
    """Engine socket backed by an aiohttp WebSocket.

    Owns its ``aiohttp.ClientSession``; closing the socket closes the session.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        websocket: aiohttp.ClientWebSocketResponse,
    ) -> None:
        self._session = session
        self._websocket = websocket
        self._close_reason = ""

    @property
    def close_code(self) -> int | None:
        return self._websocket.close_code

    @property
    def close_reason(self) -> str:
        return self._close_reason

    async def send_text(self, data: str) -> None:
        try:
            await self._websocket.send_str(data)
        except aiohttp.ClientError as e:
            raise EngineConnectionError(
                f"Engine send failed: {sanitize_error_string(str(e))}"
            ) from e

    async def receive_text(self) -> str | None:
        message = await self._websocket.receive()
        if message.type == aiohttp.WSMsgType.TEXT:
            return str(message.data)
        if message.type == aiohttp.WSMsgType.BINARY:
            return bytes(message.data).decode("utf-8", errors="replace")
        if message.type == aiohttp.WSMsgType.ERROR:
            raise EngineConnectionError(
                "Engine socket error: "
                f"{sanitize_error_string(str(self._websocket.exception()))}"
            )
        if message.type == aiohttp.WSMsgType.CLOSE:
            self._close_reason = str(message.extra or "")
        return None

    async def close(self, code: int = CLOSE_NORMAL, reason: str = "") -> None:
        try:
            await self._websocket.close(code=code, message=reason.encode("utf-8"))
        finally:
            await self._session.close()


async def connect_engine_socket(
    url: str,
    headers: Mapping[str, str],
    ssl_context: ssl.SSLContext,
) -> AiohttpEngineSocket:
    """Default connector: open the engine socket with aiohttp.

    Raises:
        EngineConnectionError: If the handshake fails.
    """
    session = aiohttp.ClientSession()
    try:
        websocket = await session.ws_connect(
            url,
            headers=dict(headers),
            ssl=ssl_context,
        )
    except aiohttp.ClientError as e:
        await session.close()
        raise EngineConnectionError(
            f"Engine connection failed: {sanitize_error_string(str(e))}"
        ) from e
    except asyncio.CancelledError:
        await session.close()
        raise
    return AiohttpEngineSocket(session, websocket)


def _app_handle(result: Mapping[str, object], context: ModelOdagErrorContext) -> int:
    """Extract ``qReturn.qHandle`` from an OpenDoc result."""
    q_return = result.get("qReturn")
    handle = q_return.get("qHandle") if isinstance(q_return, dict) else None
    if not isinstance(handle, int) or isinstance(handle, bool):
        raise EngineProtocolDecodeError(
            "OpenDoc response missing qReturn.qHandle", context=context
        )
    return handle


def _object_id(result: Mapping[str, object]) -> str | None:
    q_return = result.get("qReturn")
    if isinstance(q_return, dict):
        q_generic_id = q_return.get("qGenericId")
        if isinstance(q_generic_id, str):
            return q_generic_id
    return None


class HandlerEngineNavigation:
    """Engine-side operations against one application per call.

    Example:
        >>> navigation = HandlerEngineNavigation(config, identity)
        >>> registration = await navigation.register_navigation_link(
        ...     selection_app_id="4f2a...", link_id="link-42"
        ... )
        >>> registration.app_handle
        1
    """

    def __init__(
        self,
        config: ModelOdagProvisionerConfig,
        identity: IdentityContext,
        connector: ProtocolEngineConnector | None = None,
    ) -> None:
        self._config = config
        self._identity = identity
        self._connector: ProtocolEngineConnector = connector or connect_engine_socket

    def _error_context(
        self, operation: str, correlation_id: UUID | None
    ) -> ModelOdagErrorContext:
        return ModelOdagErrorContext(
            transport_type=EnumTransportType.WEBSOCKET,
            operation=operation,
            target_name=_ENGINE_TARGET,
            correlation_id=correlation_id,
        )

    async def _connect(
        self, app_id: str, context: ModelOdagErrorContext
    ) -> EngineRpcSession:
        """Open the engine socket within the connect timeout and start a session."""
        timeout = self._config.engine_connect_timeout_seconds
        try:
            socket = await asyncio.wait_for(
                self._connector(
                    self._config.engine_app_url(app_id),
                    self._identity.headers(),
                    self._identity.ssl_context,
                ),
                timeout=timeout,
            )
        except TimeoutError as e:
            raise EngineConnectionTimeoutError(
                f"Engine connection timed out after {timeout}s",
                context=context,
                timeout_seconds=timeout,
            ) from e
        except OSError as e:
            raise EngineConnectionError(
                f"Engine connection failed: {sanitize_error_string(str(e))}",
                context=context,
            ) from e

        session = EngineRpcSession(
            socket,
            read_timeout_seconds=self._config.engine_read_timeout_seconds,
            context=context,
        )
        session.start()
        return session

    async def _open_doc(
        self,
        session: EngineRpcSession,
        app_id: str,
        context: ModelOdagErrorContext,
    ) -> int:
        result = await session.call(SESSION_ROOT_HANDLE, "OpenDoc", [app_id])
        try:
            return _app_handle(result, context)
        except EngineProtocolDecodeError:
            await session.close(CLOSE_UNSUPPORTED_DATA, "Undecodable frame")
            raise

    async def register_navigation_link(
        self,
        selection_app_id: str,
        link_id: str,
        correlation_id: UUID | None = None,
    ) -> ModelNavigationRegistration:
        """Create the navigation object for ``link_id`` and save the app.

        Raises:
            NavigationRegistrationError: Any connection, protocol, remote or
                timeout failure. The link resource is left untouched.
        """
        context = self._error_context("register_navigation_link", correlation_id)
        state = EnumEngineSessionState.CONNECTING
        log_extra: dict[str, object] = {
            "selection_app_id": selection_app_id,
            "link_id": link_id,
            "correlation_id": str(correlation_id) if correlation_id else None,
        }

        try:
            session = await self._connect(selection_app_id, context)
        except NavigationRegistrationError:
            logger.warning(
                "Engine connection failed",
                extra={**log_extra, "state": EnumEngineSessionState.FAILED.value},
            )
            raise

        try:
            app_handle = await self._open_doc(session, selection_app_id, context)
            state = EnumEngineSessionState.APP_OPEN
            logger.debug(
                "Selection app opened",
                extra={**log_extra, "app_handle": app_handle},
            )

            created = await session.call(
                app_handle,
                NAVIGATION_LINK_METHOD,
                {
                    "qProp": {
                        "qInfo": {"qType": NAVIGATION_OBJECT_TYPE},
                        "qMetaDef": {"odagLinkRef": link_id},
                    }
                },
            )
            state = EnumEngineSessionState.OBJECT_CREATED

            await session.call(app_handle, "DoSave", [])
            state = EnumEngineSessionState.SAVED
        except NavigationRegistrationError as e:
            logger.warning(
                "Navigation registration failed",
                extra={
                    **log_extra,
                    "state": EnumEngineSessionState.FAILED.value,
                    "last_state": state.value,
                    "error_type": type(e).__name__,
                },
            )
            raise
        finally:
            await session.close()

        logger.info(
            "Navigation link registered",
            extra={**log_extra, "state": state.value},
        )
        return ModelNavigationRegistration(
            selection_app_id=selection_app_id,
            link_id=link_id,
            app_handle=app_handle,
            object_id=_object_id(created),
        )

    async def check_expression(
        self,
        app_id: str,
        expression: str,
        correlation_id: UUID | None = None,
    ) -> ModelExpressionCheckResult:
        """Ask the engine whether ``expression`` is valid inside ``app_id``.

        A remote error or a non-empty ``qErrorMsg`` yields ``valid=False``.

        Raises:
            NavigationRegistrationError: On connection, decode or timeout failure.
        """
        context = self._error_context("check_expression", correlation_id)
        session = await self._connect(app_id, context)
        try:
            app_handle = await self._open_doc(session, app_id, context)
            result = await session.call(app_handle, "CheckExpression", [expression])
        except EngineRemoteError as e:
            return ModelExpressionCheckResult(
                app_id=app_id,
                expression=expression,
                valid=False,
                error_message=e.remote_message,
            )
        finally:
            await session.close()

        error_message = result.get("qErrorMsg")
        if isinstance(error_message, str) and error_message:
            return ModelExpressionCheckResult(
                app_id=app_id,
                expression=expression,
                valid=False,
                error_message=error_message,
            )
        return ModelExpressionCheckResult(app_id=app_id, expression=expression, valid=True)


__all__: list[str] = [
    "NAVIGATION_OBJECT_TYPE",
    "AiohttpEngineSocket",
    "HandlerEngineNavigation",
    "connect_engine_socket",
]
