# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ODAG Provisioning Service.

This module composes the REST and engine handlers into one provisioning
request:

    RECEIVED -> AUTHENTICATING -> VALIDATING_APPS -> CREATING_LINK
             -> REGISTERING_NAVIGATION -> DONE

Outcomes:
    - Any error before the link resource exists returns
      ModelProvisioningFailure; nothing was created remotely.
    - Any error while registering navigation returns
      ModelProvisioningPartialSuccess carrying the created link ID and the
      manual remediation steps. The link is never deleted.
    - Otherwise ModelProvisioningSuccess.

    ``provision`` and ``test_connection`` return outcomes instead of raising.
    Errors raised by the handlers are typed OdagRuntimeError subclasses.

Authentication:
    The identity is proven against the repository API at most once per
    service instance. Concurrent first requests serialize on an
    ``asyncio.Lock`` and share the resulting ModelAuthenticatedSession.

Example:
    >>> config = ModelOdagProvisionerConfig.from_env()
    >>> async with ServiceOdagProvisioner(config) as provisioner:
    ...     outcome = await provisioner.provision({
    ...         "linkName": "Sales detail",
    ...         "selectionAppId": "4f2a...",
    ...         "templateAppId": "9c1d...",
    ...         "rowEstExpr": "Sum(Rows)",
    ...     })
    ...     print(outcome.to_response())
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from odag_provisioner.enums import (
    EnumApplicationRole,
    EnumProvisioningPhase,
    EnumTransportType,
)
from odag_provisioner.errors import (
    ApplicationNotFoundError,
    ModelOdagErrorContext,
    OdagRuntimeError,
)
from odag_provisioner.handlers import HandlerEngineNavigation, HandlerResourceApi
from odag_provisioner.models import (
    ModelAppValidationResult,
    ModelAuthenticatedSession,
    ModelConnectionReport,
    ModelExpressionCheckResult,
    ModelLinkRequest,
    ModelProvisioningFailure,
    ModelProvisioningPartialSuccess,
    ModelProvisioningSuccess,
    ProvisioningOutcome,
    build_manual_steps,
)
from odag_provisioner.security import IdentityContext
from odag_provisioner.utils import sanitize_error_string

if TYPE_CHECKING:
    from types import TracebackType

    from odag_provisioner.models import ModelOdagProvisionerConfig

logger = logging.getLogger(__name__)


def _error_message(error: BaseException) -> str:
    if isinstance(error, OdagRuntimeError):
        return error.message
    return sanitize_error_string(str(error)) or type(error).__name__


def _error_code(error: OdagRuntimeError) -> str | None:
    code = error.error_code
    if code is None:
        return None
    return str(getattr(code, "value", code))


class ServiceOdagProvisioner:
    """Provisions ODAG links and registers their navigation objects.

    Args:
        config: Provisioner configuration
        identity: Identity context; loaded from ``config.certs_path`` when omitted
        resource_api: REST handler; built from config and identity when omitted
        navigation: Engine handler; built from config and identity when omitted

    Raises:
        ConfigurationError: At construction, when certificate material is unusable.
    """

    def __init__(
        self,
        config: ModelOdagProvisionerConfig,
        identity: IdentityContext | None = None,
        resource_api: HandlerResourceApi | None = None,
        navigation: HandlerEngineNavigation | None = None,
    ) -> None:
        self._config = config
        self._identity = identity or IdentityContext.from_config(config)
        self._resource_api = resource_api or HandlerResourceApi(config, self._identity)
        self._navigation = navigation or HandlerEngineNavigation(
            config, self._identity
        )
        self._auth_lock = asyncio.Lock()
        self._auth_session: ModelAuthenticatedSession | None = None

    async def __aenter__(self) -> ServiceOdagProvisioner:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the HTTP client."""
        await self._resource_api.aclose()

    @property
    def identity(self) -> IdentityContext:
        return self._identity

    @property
    def authenticated_session(self) -> ModelAuthenticatedSession | None:
        """The session established by the first request, if any."""
        return self._auth_session

    async def _ensure_authenticated(
        self, correlation_id: UUID | None = None
    ) -> ModelAuthenticatedSession:
        if self._auth_session is not None:
            return self._auth_session
        async with self._auth_lock:
            # Another request may have authenticated while this one waited.
            if self._auth_session is None:
                self._auth_session = await self._resource_api.authenticate(
                    correlation_id
                )
            return self._auth_session

    async def _validate_application(
        self,
        role: EnumApplicationRole,
        app_id: str,
        correlation_id: UUID,
    ) -> ModelAppValidationResult:
        result = await self._resource_api.validate_application(app_id, correlation_id)
        if not result.valid:
            raise ApplicationNotFoundError(
                role,
                app_id,
                reason=result.reason,
                context=ModelOdagErrorContext(
                    transport_type=EnumTransportType.HTTP,
                    operation="validate_application",
                    target_name=role.value,
                    correlation_id=correlation_id,
                ),
            )
        return result

    async def provision(
        self,
        request: ModelLinkRequest | Mapping[str, object],
        correlation_id: UUID | None = None,
    ) -> ProvisioningOutcome:
        """Run one provisioning request to completion.

        Args:
            request: A validated request, or a raw body using the wire field
                names (``linkName``, ``selectionAppId``, ...)
            correlation_id: Tracing ID; generated when omitted

        Returns:
            Success, PartialSuccess or Failure. Domain errors never propagate.
        """
        correlation_id = correlation_id or uuid4()
        phase = EnumProvisioningPhase.RECEIVED
        log_extra: dict[str, object] = {"correlation_id": str(correlation_id)}

        try:
            if isinstance(request, ModelLinkRequest):
                link_request = request
            else:
                link_request = ModelLinkRequest.from_mapping(
                    request,
                    context=ModelOdagErrorContext(
                        transport_type=EnumTransportType.LOCAL,
                        operation="provision",
                        correlation_id=correlation_id,
                    ),
                )
            log_extra["link_name"] = link_request.link_name

            phase = EnumProvisioningPhase.AUTHENTICATING
            await self._ensure_authenticated(correlation_id)

            phase = EnumProvisioningPhase.VALIDATING_APPS
            selection = await self._validate_application(
                EnumApplicationRole.SELECTION,
                link_request.selection_app_id,
                correlation_id,
            )
            template = await self._validate_application(
                EnumApplicationRole.TEMPLATE,
                link_request.template_app_id,
                correlation_id,
            )

            phase = EnumProvisioningPhase.CREATING_LINK
            link = await self._resource_api.create_link(link_request, correlation_id)
        except OdagRuntimeError as e:
            logger.warning(
                "Provisioning failed",
                extra={
                    **log_extra,
                    "phase": phase.value,
                    "error_type": type(e).__name__,
                    "error": e.message,
                },
            )
            return ModelProvisioningFailure(
                error=e.message,
                error_type=type(e).__name__,
                error_code=_error_code(e),
                failed_phase=phase,
                correlation_id=correlation_id,
            )

        phase = EnumProvisioningPhase.REGISTERING_NAVIGATION
        log_extra["link_id"] = link.link_id
        try:
            await self._navigation.register_navigation_link(
                link_request.selection_app_id,
                link.link_id,
                correlation_id,
            )
        except Exception as e:
            # The link exists remotely; the caller must always learn its ID.
            navigation_error = _error_message(e)
            if isinstance(e, OdagRuntimeError):
                logger.warning(
                    "Navigation registration failed; returning partial success",
                    extra={**log_extra, "error_type": type(e).__name__},
                )
            else:
                logger.exception(
                    "Unexpected navigation failure; returning partial success",
                    extra=log_extra,
                )
            return ModelProvisioningPartialSuccess(
                link_id=link.link_id,
                selection_app_id=link_request.selection_app_id,
                template_app_id=link_request.template_app_id,
                selection_app_name=selection.name,
                template_app_name=template.name,
                navigation_error=navigation_error,
                manual_steps=build_manual_steps(link.link_id, link_request.link_name),
                correlation_id=correlation_id,
            )

        phase = EnumProvisioningPhase.DONE
        logger.info("Provisioning complete", extra={**log_extra, "phase": phase.value})
        return ModelProvisioningSuccess(
            link_id=link.link_id,
            selection_app_id=link_request.selection_app_id,
            template_app_id=link_request.template_app_id,
            selection_app_name=selection.name,
            template_app_name=template.name,
            correlation_id=correlation_id,
        )

    async def test_connection(self) -> ModelConnectionReport:
        """Probe authentication, the repository API and the link service.

        Never raises. A failed authentication yields ``success=False``; an
        unreachable link service is reported in its probe only.
        """
        try:
            async with self._auth_lock:
                self._auth_session = await self._resource_api.authenticate()
            repository = await self._resource_api.probe_repository_api()
            link_service = await self._resource_api.probe_link_service()
        except Exception as e:
            error = _error_message(e)
            logger.warning(
                "Connection test failed",
                extra={"error_type": type(e).__name__, "error": error},
            )
            return ModelConnectionReport(success=False, error=error)

        return ModelConnectionReport(
            success=True,
            authenticated=True,
            server_version=self._auth_session.server_version,
            probes=(repository, link_service),
        )

    async def check_expression(
        self,
        app_id: str,
        expression: str,
        correlation_id: UUID | None = None,
    ) -> ModelExpressionCheckResult:
        """Check an expression inside an app through the engine.

        Raises:
            NavigationRegistrationError: On engine connection failure.
        """
        return await self._navigation.check_expression(
            app_id, expression, correlation_id or uuid4()
        )


__all__: list[str] = ["ServiceOdagProvisioner"]
