# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Connection diagnostic report model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from odag_provisioner.models.model_subsystem_probe import ModelSubsystemProbe


class ModelConnectionReport(BaseModel):
    """Result of the connection diagnostic.

    The diagnostic never raises; failures land in ``error`` with
    ``success=False``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    success: bool
    authenticated: bool = False
    server_version: str | None = None
    probes: tuple[ModelSubsystemProbe, ...] = Field(default_factory=tuple)
    error: str | None = None

    def to_response(self) -> dict[str, object]:
        """Caller-visible record."""
        if not self.success:
            return {"success": False, "error": self.error}
        response: dict[str, object] = {
            "success": True,
            "message": "Connection test completed",
            "authentication": "successful" if self.authenticated else "failed",
            "serverVersion": self.server_version,
        }
        for probe in self.probes:
            response[probe.name] = {
                "reachable": probe.reachable,
                "statusCode": probe.status_code,
                "error": probe.error,
            }
        return response


__all__: list[str] = ["ModelConnectionReport"]
