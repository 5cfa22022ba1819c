# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Navigation registration result model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

NAVIGATION_LINK_METHOD: str = "CreateObject"


class ModelNavigationRegistration(BaseModel):
    """Confirmation that the navigation object was created and the app saved.

    Attributes:
        selection_app_id: App the object was created in
        link_id: Link resource the object references
        app_handle: Engine handle the exchange ran against (session-scoped)
        object_id: Engine-assigned ID of the created object, when reported
        method: Engine method used to create the object
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    selection_app_id: str
    link_id: str
    app_handle: int
    object_id: str | None = None
    method: str = NAVIGATION_LINK_METHOD


__all__: list[str] = ["NAVIGATION_LINK_METHOD", "ModelNavigationRegistration"]
