# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Resource API Handler - REST calls to the repository API and link service.

This handler wraps the three request/response operations the provisioner
performs over HTTPS, plus two read-only reachability probes:

    - authenticate: ``GET /qrs/about`` on the repository API
    - validate_application: ``GET /qrs/app/{id}`` on the repository API
    - create_link: ``POST /v1/links`` on the link service
    - probe_repository_api / probe_link_service: diagnostic GETs that never raise

Every call carries the identity headers and the ``xrfkey`` query parameter.
Application IDs are escaped as a single path segment, so an ID can never
redirect the lookup to another resource.
The link service is always addressed on its own port without the virtual
proxy prefix.

Error Handling:
    Non-2xx statuses from the link service map to a fixed set of typed
    LinkCreationError subclasses. Nothing is retried; a created link is a
    durable remote resource and a blind retry could create a duplicate.
    Response body snippets included in errors are sanitized via
    ``sanitize_error_string()``.

Coroutine Safety:
    One ``httpx.AsyncClient`` is shared by all concurrent requests. The
    handler keeps no per-request state.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx

from odag_provisioner.enums import EnumTransportType
from odag_provisioner.errors import (
    ApplicationLookupError,
    AuthenticationFailedError,
    InvalidLinkConfigurationError,
    LinkCreationError,
    LinkEndpointMisconfiguredError,
    LinkForbiddenError,
    LinkRemoteServerError,
    LinkServiceConnectionError,
    LinkServiceUnavailableError,
    LinkUnauthorizedError,
    LinkUnexpectedStatusError,
    ModelOdagErrorContext,
)
from odag_provisioner.models import (
    ModelAppRetentionTime,
    ModelAppValidationResult,
    ModelAuthenticatedSession,
    ModelGeneratedAppName,
    ModelLinkResource,
    ModelRowEstimationRange,
    ModelSubsystemProbe,
)
from odag_provisioner.models.constants_link_policy import default_generated_app_name
from odag_provisioner.utils import sanitize_error_string

if TYPE_CHECKING:
    from uuid import UUID

    from odag_provisioner.models import ModelLinkRequest, ModelOdagProvisionerConfig
    from odag_provisioner.security import IdentityContext

logger = logging.getLogger(__name__)

_REPOSITORY_TARGET: str = "repository_api"
_LINK_SERVICE_TARGET: str = "link_service"

_ABOUT_PATH: str = "/qrs/about"
_APP_PATH: str = "/qrs/app/{app_id}"
_LINKS_PATH: str = "/v1/links"


def build_link_payload(request: ModelLinkRequest) -> dict[str, object]:
    """Build the link-service body for a request.

    Override blocks on the request replace the defaults wholesale; absent or
    empty overrides fall back to one ``User_*`` entry per block.
    """
    row_ranges = request.row_estimation_ranges or (ModelRowEstimationRange(),)
    retention = request.app_retention_times or (ModelAppRetentionTime(),)
    names = request.generated_app_names or (
        ModelGeneratedAppName(
            format_string=default_generated_app_name(request.link_name)
        ),
    )

    return {
        "name": request.link_name,
        "selectionApp": request.selection_app_id,
        "templateApp": request.template_app_id,
        "rowEstExpr": request.row_estimation_expression,
        "properties": {
            "rowEstRange": [r.model_dump(by_alias=True) for r in row_ranges],
            "appRetentionTime": [r.model_dump(by_alias=True) for r in retention],
            "genAppName": [n.model_dump(by_alias=True) for n in names],
        },
    }


def _json_object(response: httpx.Response) -> dict[str, object]:
    """Decode a response body as a JSON object, or ``{}`` if it is not one."""
    if not response.content:
        return {}
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _remote_message(response: httpx.Response) -> str | None:
    message = _json_object(response).get("message")
    if isinstance(message, str) and message:
        return sanitize_error_string(message)
    return None


class HandlerResourceApi:
    """REST client for the repository API and the link service.

    Attributes:
        config: Provisioner configuration (hosts, ports, timeouts)
        identity: Identity context supplying TLS material and headers

    Example:
        >>> api = HandlerResourceApi(config, identity)
        >>> session = await api.authenticate()
        >>> result = await api.validate_application("4f2a...")
        >>> await api.aclose()
    """

    def __init__(
        self,
        config: ModelOdagProvisionerConfig,
        identity: IdentityContext,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the handler.

        Args:
            config: Provisioner configuration
            identity: Identity context for TLS and headers
            http_client: Optional pre-configured client. Injected clients are
                not closed by ``aclose()``.
        """
        self._config = config
        self._identity = identity
        if http_client is not None:
            self._client = http_client
            self._owns_client = False
        else:
            self._client = httpx.AsyncClient(
                verify=identity.ssl_context,
                timeout=httpx.Timeout(config.request_timeout_seconds),
            )
            self._owns_client = True

    async def aclose(self) -> None:
        """Close the HTTP client if this handler created it."""
        if self._owns_client:
            await self._client.aclose()

    def _error_context(
        self,
        operation: str,
        target_name: str,
        correlation_id: UUID | None,
    ) -> ModelOdagErrorContext:
        return ModelOdagErrorContext(
            transport_type=EnumTransportType.HTTP,
            operation=operation,
            target_name=target_name,
            correlation_id=correlation_id,
        )

    def _repository_url(self, path: str) -> str:
        return f"{self._config.qrs_base_url}{path}"

    def _link_service_url(self, path: str) -> str:
        return f"{self._config.odag_base_url}{path}"

    async def authenticate(
        self, correlation_id: UUID | None = None
    ) -> ModelAuthenticatedSession:
        """Prove the identity is accepted by the repository API.

        Raises:
            AuthenticationFailedError: On transport failure or any non-2xx status.
        """
        ctx = self._error_context("authenticate", _REPOSITORY_TARGET, correlation_id)
        try:
            response = await self._client.get(
                self._repository_url(_ABOUT_PATH),
                headers=self._identity.headers(),
                params=self._identity.query_params(),
            )
        except httpx.HTTPError as e:
            raise AuthenticationFailedError(
                f"Authentication failed: {sanitize_error_string(str(e))}",
                context=ctx,
            ) from e

        if not response.is_success:
            raise AuthenticationFailedError(
                f"Authentication failed: HTTP {response.status_code}",
                context=ctx,
                status_code=response.status_code,
            )

        build_version = _json_object(response).get("buildVersion")
        session = ModelAuthenticatedSession(
            authenticated_at=datetime.now(UTC),
            server_version=build_version if isinstance(build_version, str) else None,
        )
        logger.info(
            "Authenticated against repository API",
            extra={
                "server_version": session.server_version,
                "correlation_id": str(correlation_id) if correlation_id else None,
            },
        )
        return session

    async def validate_application(
        self,
        app_id: str,
        correlation_id: UUID | None = None,
    ) -> ModelAppValidationResult:
        """Resolve an application ID to its metadata.

        A 404, or a 2xx body whose ``id`` is absent or differs from
        ``app_id``, is an expected outcome and returns ``valid=False``.

        Raises:
            ApplicationLookupError: On transport failure or another non-2xx status.
        """
        ctx = self._error_context(
            "validate_application", _REPOSITORY_TARGET, correlation_id
        )
        app_path = _APP_PATH.format(app_id=quote(app_id, safe=""))
        try:
            response = await self._client.get(
                self._repository_url(app_path),
                headers=self._identity.headers(),
                params=self._identity.query_params(),
            )
        except httpx.HTTPError as e:
            raise ApplicationLookupError(
                f"Failed to validate app ID {app_id}: {sanitize_error_string(str(e))}",
                app_id=app_id,
                context=ctx,
            ) from e

        if response.status_code == 404:
            logger.info(
                "Application not found",
                extra={
                    "app_id": app_id,
                    "correlation_id": str(correlation_id) if correlation_id else None,
                },
            )
            return ModelAppValidationResult.not_found(app_id)

        if not response.is_success:
            raise ApplicationLookupError(
                f"Failed to validate app ID {app_id}: HTTP {response.status_code}",
                app_id=app_id,
                context=ctx,
                status_code=response.status_code,
            )

        body = _json_object(response)
        resolved_id = body.get("id")
        if not resolved_id or str(resolved_id).lower() != app_id.lower():
            return ModelAppValidationResult.not_found(
                app_id, reason=f"App not found: {app_id}"
            )

        name = body.get("name")
        published = body.get("published")
        result = ModelAppValidationResult(
            valid=True,
            app_id=app_id,
            name=name if isinstance(name, str) else None,
            resolved_id=str(resolved_id),
            published=published if isinstance(published, bool) else None,
        )
        logger.debug(
            "Application resolved",
            extra={
                "app_id": app_id,
                "app_name": result.name,
                "correlation_id": str(correlation_id) if correlation_id else None,
            },
        )
        return result

    async def create_link(
        self,
        request: ModelLinkRequest,
        correlation_id: UUID | None = None,
    ) -> ModelLinkResource:
        """Create the link resource. Never retried.

        Raises:
            LinkCreationError: A subclass matching the response status, or
                the base class when a 2xx body carries no identifier.
            LinkServiceConnectionError: On transport failure.
        """
        ctx = self._error_context("create_link", _LINK_SERVICE_TARGET, correlation_id)
        payload = build_link_payload(request)

        logger.info(
            "Creating ODAG link",
            extra={
                "link_name": request.link_name,
                "selection_app_id": request.selection_app_id,
                "template_app_id": request.template_app_id,
                "correlation_id": str(correlation_id) if correlation_id else None,
            },
        )

        try:
            response = await self._client.post(
                self._link_service_url(_LINKS_PATH),
                headers=self._identity.headers(),
                params=self._identity.query_params(),
                json=payload,
            )
        except httpx.HTTPError as e:
            raise LinkServiceConnectionError(
                f"Failed to create ODAG link: {sanitize_error_string(str(e))}",
                context=ctx,
            ) from e

        if not response.is_success:
            raise self._map_link_status_to_error(response, ctx)

        body = _json_object(response)
        object_def = body.get("objectDef")
        if isinstance(object_def, dict) and object_def.get("id"):
            resource_body: dict[str, object] = object_def
        elif body.get("id"):
            resource_body = body
        else:
            raise LinkCreationError(
                "Failed to create ODAG link - no ID returned",
                context=ctx,
                status_code=response.status_code,
            )

        name = resource_body.get("name")
        resource = ModelLinkResource(
            link_id=str(resource_body["id"]),
            name=name if isinstance(name, str) else None,
            body=resource_body,
        )
        logger.info(
            "ODAG link created",
            extra={
                "link_id": resource.link_id,
                "correlation_id": str(correlation_id) if correlation_id else None,
            },
        )
        return resource

    def _map_link_status_to_error(
        self,
        response: httpx.Response,
        ctx: ModelOdagErrorContext,
    ) -> LinkCreationError:
        """Map a non-2xx link-service status to a typed error (returned, not raised)."""
        status = response.status_code
        remote_message = _remote_message(response)

        if status == 400:
            return InvalidLinkConfigurationError(
                f"Bad Request: {remote_message or 'Invalid ODAG configuration'}",
                context=ctx,
            )
        if status == 401:
            return LinkUnauthorizedError(
                "Unauthorized: Please check your authentication credentials",
                context=ctx,
            )
        if status == 403:
            return LinkForbiddenError(
                "Forbidden: User may not have ODAG permissions",
                context=ctx,
            )
        if status == 404:
            return LinkServiceUnavailableError(
                "Not Found: ODAG service may not be running on port "
                f"{self._config.odag_port}",
                context=ctx,
            )
        if status == 405:
            return LinkEndpointMisconfiguredError(
                "Method Not Allowed: Check ODAG service configuration and URL path",
                context=ctx,
            )
        if status == 500:
            return LinkRemoteServerError(
                f"Server Error: {remote_message or 'Internal server error'}",
                context=ctx,
            )
        return LinkUnexpectedStatusError(
            f"HTTP {status}: {remote_message or response.reason_phrase or 'Unexpected status'}",
            status_code=status,
            context=ctx,
        )

    async def probe_repository_api(self) -> ModelSubsystemProbe:
        """Read-only reachability check of the repository API. Never raises."""
        return await self._probe(_REPOSITORY_TARGET, self._repository_url(_ABOUT_PATH))

    async def probe_link_service(self) -> ModelSubsystemProbe:
        """Read-only reachability check of the link service. Never raises."""
        return await self._probe(
            _LINK_SERVICE_TARGET, self._link_service_url(_LINKS_PATH)
        )

    async def _probe(self, name: str, url: str) -> ModelSubsystemProbe:
        try:
            response = await self._client.get(
                url,
                headers=self._identity.headers(),
                params=self._identity.query_params(),
            )
        except httpx.HTTPError as e:
            error = sanitize_error_string(str(e)) or type(e).__name__
            logger.warning(
                "Subsystem unreachable",
                extra={"subsystem": name, "error": error},
            )
            return ModelSubsystemProbe(name=name, reachable=False, error=error)

        if response.is_success:
            return ModelSubsystemProbe(
                name=name, reachable=True, status_code=response.status_code
            )
        return ModelSubsystemProbe(
            name=name,
            reachable=False,
            status_code=response.status_code,
            error=f"HTTP {response.status_code}",
        )


__all__: list[str] = ["HandlerResourceApi", "build_link_payload"]
