# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Provisioner Configuration Model.

This module provides the Pydantic configuration model describing where the
remote platform lives and which principal the provisioner impersonates.

Security Note:
    The configuration only names the certificate directory. Certificate and
    key contents are read by IdentityContext and never stored on this model.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from urllib.parse import quote

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from odag_provisioner.enums import EnumTransportType
from odag_provisioner.errors import ConfigurationError, ModelOdagErrorContext

_ENV_PREFIX: str = "ODAG_"

# Field name -> converter applied to the raw environment string.
_ENV_FIELDS: dict[str, type] = {
    "host": str,
    "qrs_port": int,
    "engine_port": int,
    "odag_port": int,
    "certs_path": str,
    "user_directory": str,
    "user_id": str,
    "virtual_proxy": str,
    "request_timeout_seconds": float,
    "engine_connect_timeout_seconds": float,
    "engine_read_timeout_seconds": float,
}


class ModelOdagProvisionerConfig(BaseModel):
    """Configuration for the ODAG provisioner.

    Attributes:
        host: Hostname of the analytics platform
        qrs_port: Repository API port (default 4242)
        engine_port: Engine JSON-RPC port (default 4747)
        odag_port: Link service port (default 9098)
        certs_path: Directory holding client.pem, client_key.pem and root.pem
        user_directory: Impersonated user directory
        user_id: Impersonated user ID
        virtual_proxy: Optional virtual proxy prefix for repository and engine URLs
        request_timeout_seconds: Per-call REST timeout
        engine_connect_timeout_seconds: Engine WebSocket handshake deadline
        engine_read_timeout_seconds: Engine inactivity deadline per awaited frame

    Example:
        >>> config = ModelOdagProvisionerConfig(
        ...     host="qlik.example.com",
        ...     certs_path="/etc/odag/certs",
        ...     user_directory="INTERNAL",
        ...     user_id="sa_repository",
        ... )
        >>> config.qrs_base_url
        'https://qlik.example.com:4242'
    """

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        extra="forbid",
        from_attributes=True,
    )

    host: str = Field(
        default="localhost",
        min_length=1,
        description="Hostname of the analytics platform",
    )
    qrs_port: int = Field(
        default=4242,
        ge=1,
        le=65535,
        description="Repository API port",
    )
    engine_port: int = Field(
        default=4747,
        ge=1,
        le=65535,
        description="Engine JSON-RPC port",
    )
    odag_port: int = Field(
        default=9098,
        ge=1,
        le=65535,
        description="Link service port",
    )
    certs_path: str = Field(
        description="Directory holding client.pem, client_key.pem and root.pem",
    )
    user_directory: str = Field(
        min_length=1,
        description="Impersonated user directory",
    )
    user_id: str = Field(
        min_length=1,
        description="Impersonated user ID",
    )
    virtual_proxy: str = Field(
        default="",
        description="Virtual proxy prefix (empty for the default proxy)",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        le=300.0,
        description="Per-call REST timeout in seconds",
    )
    engine_connect_timeout_seconds: float = Field(
        default=15.0,
        gt=0.0,
        le=300.0,
        description="Engine WebSocket handshake deadline in seconds",
    )
    engine_read_timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        le=600.0,
        description="Engine inactivity deadline per awaited frame in seconds",
    )

    @property
    def qrs_base_url(self) -> str:
        """Repository API base URL, including the virtual proxy when set."""
        return f"https://{self.host}:{self.qrs_port}{_proxy_segment(self.virtual_proxy)}"

    @property
    def odag_base_url(self) -> str:
        """Link service base URL (never routed through the virtual proxy)."""
        return f"https://{self.host}:{self.odag_port}"

    def engine_app_url(self, app_id: str) -> str:
        """Engine WebSocket URL for one application, escaping ``app_id`` as one segment."""
        proxy = _proxy_segment(self.virtual_proxy)
        return f"wss://{self.host}:{self.engine_port}{proxy}/app/{quote(app_id, safe='')}"

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None
    ) -> ModelOdagProvisionerConfig:
        """Build a configuration from ``ODAG_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ`` (tests).

        Raises:
            ConfigurationError: If a value cannot be converted or fails validation.
        """
        source = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for field_name, converter in _ENV_FIELDS.items():
            raw = source.get(f"{_ENV_PREFIX}{field_name.upper()}")
            if raw is None or raw == "":
                continue
            try:
                values[field_name] = converter(raw)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid value for {_ENV_PREFIX}{field_name.upper()}",
                    context=_config_context("from_env"),
                    field_name=field_name,
                ) from e
        return cls._validate_values(values, "from_env")

    @classmethod
    def from_yaml(cls, path: str | Path) -> ModelOdagProvisionerConfig:
        """Build a configuration from a YAML mapping file.

        Raises:
            ConfigurationError: If the file is unreadable, not a mapping, or invalid.
        """
        config_path = Path(path)
        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to read configuration file {config_path}",
                context=_config_context("from_yaml"),
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file {config_path} must contain a mapping",
                context=_config_context("from_yaml"),
            )
        return cls._validate_values(data, "from_yaml")

    @classmethod
    def _validate_values(
        cls, values: dict[str, object], operation: str
    ) -> ModelOdagProvisionerConfig:
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
            raise ConfigurationError(
                f"Invalid provisioner configuration: {', '.join(fields)}",
                context=_config_context(operation),
            ) from e


def _proxy_segment(virtual_proxy: str) -> str:
    proxy = virtual_proxy.strip("/")
    return f"/{proxy}" if proxy else ""


def _config_context(operation: str) -> ModelOdagErrorContext:
    return ModelOdagErrorContext(
        transport_type=EnumTransportType.LOCAL,
        operation=operation,
        target_name="provisioner_config",
    )


__all__: list[str] = ["ModelOdagProvisionerConfig"]
