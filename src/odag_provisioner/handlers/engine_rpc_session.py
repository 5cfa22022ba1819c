# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Engine RPC Session - correlated JSON-RPC calls over one engine socket.

Outbound frames have the shape::

    {"handle": <int>, "method": <str>, "params": <list|dict>,
     "jsonrpc": "2.0", "id": <int>}

with ids starting at 1 and increasing per call. A single reader task owns the
receive side of the socket and dispatches every inbound frame through one
point: the frame's ``id`` is looked up in the pending table, and the matching
future is completed and removed. Frames without an ``id`` (engine
notifications) and frames whose id has no pending entry are ignored.

Failure Semantics:
    - Error frame: the awaiting call raises EngineRemoteError with the remote
      message verbatim and the socket is closed with 1011.
    - Undecodable frame: every pending call raises EngineProtocolDecodeError
      and the socket is closed with 1007.
    - Peer closure: every pending call raises EngineConnectionClosedError with
      the peer's close code and reason, including a normal 1000 closure that
      arrives before the exchange completes.
    - No frame within the read timeout: the call raises
      EngineConnectionTimeoutError.
    Once failed, the session rejects any further call with the same error.

Coroutine Safety:
    A session belongs to one provisioning request. Calls may be awaited
    concurrently; correlation is by id, not by call order.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING

from odag_provisioner.errors import (
    EngineConnectionClosedError,
    EngineConnectionError,
    EngineConnectionTimeoutError,
    EngineProtocolDecodeError,
    EngineRemoteError,
    NavigationRegistrationError,
)
from odag_provisioner.protocols import (
    CLOSE_INTERNAL_ERROR,
    CLOSE_NORMAL,
    CLOSE_UNSUPPORTED_DATA,
)
from odag_provisioner.utils import sanitize_error_string

if TYPE_CHECKING:
    from odag_provisioner.errors import ModelOdagErrorContext
    from odag_provisioner.protocols import ProtocolEngineSocket

logger = logging.getLogger(__name__)

JSONRPC_VERSION: str = "2.0"
SESSION_ROOT_HANDLE: int = -1


class EngineRpcSession:
    """JSON-RPC session over one connected engine socket.

    Example:
        >>> async with EngineRpcSession(socket, read_timeout_seconds=30.0) as rpc:
        ...     result = await rpc.call(-1, "OpenDoc", ["4f2a..."])
    """

    def __init__(
        self,
        socket: ProtocolEngineSocket,
        read_timeout_seconds: float,
        context: ModelOdagErrorContext | None = None,
    ) -> None:
        self._socket = socket
        self._read_timeout = read_timeout_seconds
        self._context = context
        self._pending: dict[int, asyncio.Future[dict[str, object]]] = {}
        self._next_id = 1
        self._reader: asyncio.Task[None] | None = None
        self._failure: NavigationRegistrationError | None = None
        self._closed = False

    async def __aenter__(self) -> EngineRpcSession:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def start(self) -> None:
        """Start the reader task. Idempotent."""
        if self._reader is None:
            self._reader = asyncio.create_task(self._read_loop())

    async def call(
        self,
        handle: int,
        method: str,
        params: list[object] | dict[str, object],
    ) -> dict[str, object]:
        """Send one request and wait for its correlated response.

        Returns:
            The response's ``result`` object (``{}`` when absent).

        Raises:
            EngineRemoteError: The engine answered with an error frame.
            EngineConnectionTimeoutError: No response within the read timeout.
            NavigationRegistrationError: The session already failed or closed.
        """
        if self._failure is not None:
            raise self._failure
        if self._closed:
            raise EngineConnectionError(
                f"Engine session closed before {method}", context=self._context
            )
        self.start()

        request_id = self._next_id
        self._next_id += 1
        future: asyncio.Future[dict[str, object]] = (
            asyncio.get_running_loop().create_future()
        )
        self._pending[request_id] = future

        frame = {
            "handle": handle,
            "method": method,
            "params": params,
            "jsonrpc": JSONRPC_VERSION,
            "id": request_id,
        }
        logger.debug(
            "Sending engine request",
            extra={"method": method, "handle": handle, "request_id": request_id},
        )

        try:
            await self._socket.send_text(json.dumps(frame))
            return await asyncio.wait_for(future, timeout=self._read_timeout)
        except EngineRemoteError as e:
            self._failure = e
            await self.close(CLOSE_INTERNAL_ERROR, "Remote error")
            raise
        except TimeoutError as e:
            timeout_error = EngineConnectionTimeoutError(
                f"No engine response to {method} within {self._read_timeout}s",
                context=self._context,
                timeout_seconds=self._read_timeout,
            )
            self._failure = timeout_error
            await self.close(CLOSE_INTERNAL_ERROR, "Read timeout")
            raise timeout_error from e
        except OSError as e:
            connection_error = EngineConnectionError(
                f"Engine send failed: {sanitize_error_string(str(e))}",
                context=self._context,
            )
            self._fail(connection_error)
            raise connection_error from e
        finally:
            self._pending.pop(request_id, None)

    async def close(self, code: int = CLOSE_NORMAL, reason: str = "") -> None:
        """Stop the reader and close the socket. Idempotent."""
        if self._closed:
            return
        self._closed = True
        if self._reader is not None and self._reader is not asyncio.current_task():
            self._reader.cancel()
            await asyncio.wait([self._reader])
        await self._socket.close(code, reason)
        for future in self._pending.values():
            if not future.done():
                future.set_exception(
                    EngineConnectionError("Engine session closed", context=self._context)
                )
        self._pending.clear()

    async def _read_loop(self) -> None:
        while True:
            try:
                text = await self._socket.receive_text()
            except NavigationRegistrationError as e:
                self._fail(e)
                return
            except OSError as e:
                self._fail(
                    EngineConnectionError(
                        f"Engine receive failed: {sanitize_error_string(str(e))}",
                        context=self._context,
                    )
                )
                return

            if text is None:
                self._fail(
                    EngineConnectionClosedError(
                        self._socket.close_code,
                        self._socket.close_reason,
                        context=self._context,
                    )
                )
                return

            try:
                frame = json.loads(text)
            except ValueError as e:
                await self._abort_undecodable(f"Malformed engine frame: {e}")
                return
            if not isinstance(frame, dict):
                await self._abort_undecodable("Engine frame is not a JSON object")
                return

            self._dispatch(frame)

    def _dispatch(self, frame: dict[str, object]) -> None:
        request_id = frame.get("id")
        if not isinstance(request_id, int) or isinstance(request_id, bool):
            return
        future = self._pending.pop(request_id, None)
        if future is None or future.done():
            return

        error = frame.get("error")
        if error is not None:
            if isinstance(error, dict):
                message = str(error.get("message") or "Unknown engine error")
                code = error.get("code")
                remote_code = code if isinstance(code, int) else None
            else:
                message = str(error)
                remote_code = None
            future.set_exception(
                EngineRemoteError(message, remote_code=remote_code, context=self._context)
            )
            return

        result = frame.get("result")
        future.set_result(result if isinstance(result, dict) else {})

    async def _abort_undecodable(self, message: str) -> None:
        self._fail(EngineProtocolDecodeError(message, context=self._context))
        self._closed = True
        await self._socket.close(CLOSE_UNSUPPORTED_DATA, "Undecodable frame")

    def _fail(self, error: NavigationRegistrationError) -> None:
        """Record the first failure and reject every pending call with it."""
        if self._failure is None:
            self._failure = error
            logger.warning(
                "Engine session failed",
                extra={
                    "error_type": type(error).__name__,
                    "pending": len(self._pending),
                },
            )
        for future in self._pending.values():
            if not future.done():
                future.set_exception(self._failure)
        self._pending.clear()


__all__: list[str] = ["JSONRPC_VERSION", "SESSION_ROOT_HANDLE", "EngineRpcSession"]
