# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Identity Context for the remote analytics platform.

Holds the mutual-TLS material, the impersonated principal and the
anti-forgery (xrf) token used on every outbound REST and engine call.

Security Policy:
    - The xrf token is generated once per instance with the ``secrets``
      CSPRNG and never rotated for the lifetime of the instance
    - The token and key material are never logged; ``repr`` masks them
    - Certificate loading failures are fatal and raised at construction

Coroutine Safety:
    Instances are never mutated after construction and may be shared by any
    number of concurrent provisioning requests.
"""

from __future__ import annotations

import logging
import secrets
import ssl
import string
from pathlib import Path
from typing import TYPE_CHECKING

from odag_provisioner.enums import EnumTransportType
from odag_provisioner.errors import ConfigurationError, ModelOdagErrorContext

if TYPE_CHECKING:
    from odag_provisioner.models import ModelOdagProvisionerConfig

logger = logging.getLogger(__name__)

CLIENT_CERT_FILE: str = "client.pem"
CLIENT_KEY_FILE: str = "client_key.pem"
ROOT_CA_FILE: str = "root.pem"

XRF_KEY_LENGTH: int = 16
XRF_KEY_ALPHABET: str = string.ascii_letters + string.digits

XRF_KEY_HEADER: str = "X-Qlik-Xrfkey"
USER_HEADER: str = "X-Qlik-User"
XRF_KEY_QUERY_PARAM: str = "xrfkey"


def generate_xrf_key() -> str:
    """Return a fresh 16-character alphanumeric anti-forgery token."""
    return "".join(secrets.choice(XRF_KEY_ALPHABET) for _ in range(XRF_KEY_LENGTH))


def _is_valid_xrf_key(value: str) -> bool:
    return len(value) == XRF_KEY_LENGTH and all(c in XRF_KEY_ALPHABET for c in value)


class IdentityContext:
    """Credentials for outbound calls to the repository, link and engine services.

    Attributes:
        ssl_context: Client SSL context with the client certificate chain
            loaded and the platform root CA trusted
        user_directory: Impersonated user directory
        user_id: Impersonated user ID
        virtual_proxy: Virtual proxy prefix, empty for the default proxy
        xrf_key: Session anti-forgery token

    Example:
        >>> identity = IdentityContext.from_config(config)
        >>> identity.user_header
        'UserDirectory=INTERNAL; UserId=sa_repository'
    """

    def __init__(
        self,
        ssl_context: ssl.SSLContext,
        user_directory: str,
        user_id: str,
        virtual_proxy: str = "",
        xrf_key: str | None = None,
    ) -> None:
        """Initialize from already-loaded SSL material.

        Args:
            ssl_context: Client SSL context for mutual TLS
            user_directory: Impersonated user directory
            user_id: Impersonated user ID
            virtual_proxy: Virtual proxy prefix
            xrf_key: Explicit anti-forgery token; generated when omitted

        Raises:
            ConfigurationError: If an explicit xrf_key is not 16 alphanumerics.
        """
        if xrf_key is not None and not _is_valid_xrf_key(xrf_key):
            raise ConfigurationError(
                "Anti-forgery token must be 16 alphanumeric characters",
                context=_identity_context("init"),
            )
        self._ssl_context = ssl_context
        self._user_directory = user_directory
        self._user_id = user_id
        self._virtual_proxy = virtual_proxy
        self._xrf_key = xrf_key if xrf_key is not None else generate_xrf_key()

    @classmethod
    def from_config(cls, config: ModelOdagProvisionerConfig) -> IdentityContext:
        """Load certificate material from ``config.certs_path``.

        Expects ``client.pem``, ``client_key.pem`` and ``root.pem`` in the
        certificate directory.

        Raises:
            ConfigurationError: If any file is missing, unreadable or malformed.
        """
        ssl_context = load_client_ssl_context(Path(config.certs_path))
        identity = cls(
            ssl_context=ssl_context,
            user_directory=config.user_directory,
            user_id=config.user_id,
            virtual_proxy=config.virtual_proxy,
        )
        logger.info(
            "Identity context established",
            extra={
                "certs_path": config.certs_path,
                "principal": f"{config.user_directory}\\{config.user_id}",
            },
        )
        return identity

    def __repr__(self) -> str:
        """Mask the token to prevent accidental exposure in logs/tracebacks."""
        return (
            f"<{type(self).__name__} principal={self._user_directory}\\{self._user_id} "
            f"xrf_key=****>"
        )

    @property
    def ssl_context(self) -> ssl.SSLContext:
        return self._ssl_context

    @property
    def user_directory(self) -> str:
        return self._user_directory

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def virtual_proxy(self) -> str:
        return self._virtual_proxy

    @property
    def xrf_key(self) -> str:
        return self._xrf_key

    @property
    def user_header(self) -> str:
        """Impersonation header value."""
        return f"UserDirectory={self._user_directory}; UserId={self._user_id}"

    def headers(self) -> dict[str, str]:
        """Headers every outbound REST and engine call must carry."""
        return {
            XRF_KEY_HEADER: self._xrf_key,
            USER_HEADER: self.user_header,
        }

    def query_params(self) -> dict[str, str]:
        """Query parameters every REST call must carry."""
        return {XRF_KEY_QUERY_PARAM: self._xrf_key}


def load_client_ssl_context(certs_path: Path) -> ssl.SSLContext:
    """Build a client SSL context from the three PEM files in ``certs_path``.

    Raises:
        ConfigurationError: If a file is missing, unreadable or malformed.
    """
    cert_file = certs_path / CLIENT_CERT_FILE
    key_file = certs_path / CLIENT_KEY_FILE
    root_file = certs_path / ROOT_CA_FILE

    for path in (cert_file, key_file, root_file):
        if not path.is_file():
            raise ConfigurationError(
                f"Certificate file not found: {path.name}",
                context=_identity_context("load_certificates"),
                certs_path=str(certs_path),
            )

    try:
        ssl_context = ssl.create_default_context(
            ssl.Purpose.SERVER_AUTH, cafile=str(root_file)
        )
        ssl_context.load_cert_chain(certfile=str(cert_file), keyfile=str(key_file))
    except (OSError, ValueError) as e:
        raise ConfigurationError(
            f"Failed to load certificate material from {certs_path}: "
            f"{type(e).__name__}",
            context=_identity_context("load_certificates"),
            certs_path=str(certs_path),
        ) from e

    return ssl_context


def _identity_context(operation: str) -> ModelOdagErrorContext:
    return ModelOdagErrorContext(
        transport_type=EnumTransportType.LOCAL,
        operation=operation,
        target_name="identity_context",
    )


__all__: list[str] = [
    "CLIENT_CERT_FILE",
    "CLIENT_KEY_FILE",
    "ROOT_CA_FILE",
    "USER_HEADER",
    "XRF_KEY_HEADER",
    "XRF_KEY_LENGTH",
    "XRF_KEY_QUERY_PARAM",
    "IdentityContext",
    "generate_xrf_key",
    "load_client_ssl_context",
]
