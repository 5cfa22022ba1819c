# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ODAG Link Request Model.

The validated input record for one provisioning attempt. Field aliases match
the JSON body the front end posts (``linkName``, ``selectionAppId``,
``templateAppId``, ``rowEstExpr``, ``rowEstRange``, ``appRetentionTime``,
``genAppName``), so raw request bodies validate directly.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from odag_provisioner.errors import (
    InvalidRequestError,
    MissingFieldError,
    ModelOdagErrorContext,
)
from odag_provisioner.models.constants_link_policy import DEFAULT_POLICY_CONTEXT
from odag_provisioner.models.model_app_retention_time import ModelAppRetentionTime
from odag_provisioner.models.model_generated_app_name import ModelGeneratedAppName
from odag_provisioner.models.model_row_estimation_range import (
    ModelRowEstimationRange,
)

# Checked in this order; the first missing one is reported.
REQUIRED_REQUEST_FIELDS: tuple[str, ...] = (
    "linkName",
    "selectionAppId",
    "templateAppId",
    "rowEstExpr",
)


class ModelLinkRequest(BaseModel):
    """Validated request to provision one ODAG link.

    Attributes:
        link_name: Display name of the link (non-empty)
        selection_app_id: App that receives the navigation object
        template_app_id: App cloned when generation is triggered
        row_estimation_expression: Expression estimating the generated row count
        description: Optional free-text description
        row_estimation_ranges: Optional override of the row-count bounds block
        app_retention_times: Optional override of the retention block
        generated_app_names: Optional override of the generated-name block
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    link_name: str = Field(min_length=1, alias="linkName")
    selection_app_id: str = Field(min_length=1, alias="selectionAppId")
    template_app_id: str = Field(min_length=1, alias="templateAppId")
    row_estimation_expression: str = Field(min_length=1, alias="rowEstExpr")
    description: str | None = Field(default=None)
    row_estimation_ranges: tuple[ModelRowEstimationRange, ...] | None = Field(
        default=None,
        alias="rowEstRange",
    )
    app_retention_times: tuple[ModelAppRetentionTime, ...] | None = Field(
        default=None,
        alias="appRetentionTime",
    )
    generated_app_names: tuple[ModelGeneratedAppName, ...] | None = Field(
        default=None,
        alias="genAppName",
    )

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, object],
        context: ModelOdagErrorContext | None = None,
    ) -> ModelLinkRequest:
        """Validate a raw request body.

        Required fields are checked first so that a missing one is reported
        by name before any other validation runs.

        Raises:
            MissingFieldError: A required field is absent or blank.
            InvalidRequestError: Any other field fails validation.
        """
        for field_name in REQUIRED_REQUEST_FIELDS:
            value = data.get(field_name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise MissingFieldError(field_name, context=context)

        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            fields = sorted(
                {".".join(str(p) for p in err["loc"]) for err in e.errors()}
            )
            raise InvalidRequestError(
                f"Invalid request fields: {', '.join(fields)}",
                context=context,
            ) from e

    @classmethod
    def from_simple_overrides(
        cls,
        *,
        link_name: str,
        selection_app_id: str,
        template_app_id: str,
        row_estimation_expression: str,
        description: str | None = None,
        max_row_count: int | None = None,
        retention_days: int | None = None,
        generated_app_name: str | None = None,
    ) -> ModelLinkRequest:
        """Build a request from the single-value overrides a form offers.

        ``max_row_count`` becomes the range ``[1, max_row_count]``,
        ``retention_days`` becomes minutes, and a non-blank
        ``generated_app_name`` becomes the name template. Non-positive or
        blank values leave the corresponding block at its default.
        """
        row_ranges = None
        if max_row_count is not None and max_row_count > 0:
            row_ranges = (
                ModelRowEstimationRange(
                    context=DEFAULT_POLICY_CONTEXT,
                    low_bound=1,
                    high_bound=max_row_count,
                ),
            )

        retention = None
        if retention_days is not None and retention_days > 0:
            retention = (
                ModelAppRetentionTime(
                    context=DEFAULT_POLICY_CONTEXT,
                    minutes=retention_days * 24 * 60,
                ),
            )

        names = None
        if generated_app_name is not None and generated_app_name.strip():
            names = (
                ModelGeneratedAppName(
                    context=DEFAULT_POLICY_CONTEXT,
                    format_string=generated_app_name,
                ),
            )

        return cls(
            link_name=link_name,
            selection_app_id=selection_app_id,
            template_app_id=template_app_id,
            row_estimation_expression=row_estimation_expression,
            description=description or None,
            row_estimation_ranges=row_ranges,
            app_retention_times=retention,
            generated_app_names=names,
        )


__all__: list[str] = ["REQUIRED_REQUEST_FIELDS", "ModelLinkRequest"]
