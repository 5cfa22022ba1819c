# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""
ODAG Provisioner CLI Commands.

Provides CLI interface for provisioning links, checking connectivity and
validating expressions against an app.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from typing import TYPE_CHECKING, NoReturn

import click
from pydantic import ValidationError
from rich.console import Console

from odag_provisioner.errors import OdagRuntimeError
from odag_provisioner.models import ModelLinkRequest, ModelOdagProvisionerConfig
from odag_provisioner.services import ServiceOdagProvisioner

if TYPE_CHECKING:
    from odag_provisioner.models import (
        ModelConnectionReport,
        ModelExpressionCheckResult,
        ProvisioningOutcome,
    )

console = Console()
error_console = Console(stderr=True)

_VALID_LOG_LEVELS: frozenset[str] = frozenset(
    {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
)


def configure_logging() -> None:
    """Configure logging from ODAG_LOG_LEVEL (default: INFO).

    Log lines go to stderr so that stdout carries only the JSON result.
    """
    log_level = os.getenv("ODAG_LOG_LEVEL", "INFO").upper()
    if log_level not in _VALID_LOG_LEVELS:
        print(
            f"Warning: Invalid ODAG_LOG_LEVEL '{log_level}', using INFO. "
            f"Valid levels: {', '.join(sorted(_VALID_LOG_LEVELS))}",
            file=sys.stderr,
        )
        log_level = "INFO"

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


@click.group()
@click.option(
    "--config",
    "config_path",
    default=None,
    envvar="ODAG_CONFIG_FILE",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML configuration file (default: ODAG_* environment variables)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """ODAG link provisioner."""
    configure_logging()
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def _load_config(ctx: click.Context) -> ModelOdagProvisionerConfig:
    config_path = ctx.obj.get("config_path")
    if config_path:
        return ModelOdagProvisionerConfig.from_yaml(config_path)
    return ModelOdagProvisionerConfig.from_env()


def _fail(message: str) -> NoReturn:
    error_console.print(f"Error: {message}", style="red", markup=False)
    raise SystemExit(1)


@cli.command("provision")
@click.option("--link-name", required=True, help="Display name of the link")
@click.option("--selection-app-id", required=True, help="Selection app ID")
@click.option("--template-app-id", required=True, help="Template app ID")
@click.option("--row-est-expr", required=True, help="Row estimation expression")
@click.option("--description", default=None, help="Optional link description")
@click.option(
    "--max-row-count",
    default=None,
    type=click.IntRange(min=1),
    help="Upper row-count bound (default: 500000)",
)
@click.option(
    "--retention-days",
    default=None,
    type=click.IntRange(min=1),
    help="Generated app retention in days (default: 7)",
)
@click.option(
    "--generated-app-name",
    default=None,
    help="Generated app name template (default: '<link name> - $(user.name) - $(=Now())')",
)
@click.pass_context
def provision_cmd(
    ctx: click.Context,
    link_name: str,
    selection_app_id: str,
    template_app_id: str,
    row_est_expr: str,
    description: str | None,
    max_row_count: int | None,
    retention_days: int | None,
    generated_app_name: str | None,
) -> None:
    """Create an ODAG link and register it in the selection app."""
    try:
        request = ModelLinkRequest.from_simple_overrides(
            link_name=link_name,
            selection_app_id=selection_app_id,
            template_app_id=template_app_id,
            row_estimation_expression=row_est_expr,
            description=description,
            max_row_count=max_row_count,
            retention_days=retention_days,
            generated_app_name=generated_app_name,
        )
    except ValidationError as e:
        fields = ", ".join(
            sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        )
        _fail(f"Invalid request fields: {fields}")

    try:
        config = _load_config(ctx)
        outcome = asyncio.run(_run_provision(config, request))
    except OdagRuntimeError as e:
        _fail(e.message)

    console.print_json(data=outcome.to_response())
    raise SystemExit(0 if outcome.success else 1)


async def _run_provision(
    config: ModelOdagProvisionerConfig, request: ModelLinkRequest
) -> ProvisioningOutcome:
    async with ServiceOdagProvisioner(config) as provisioner:
        return await provisioner.provision(request)


@cli.command("test-connection")
@click.pass_context
def test_connection_cmd(ctx: click.Context) -> None:
    """Check authentication and reachability of the remote services."""
    try:
        config = _load_config(ctx)
        report = asyncio.run(_run_test_connection(config))
    except OdagRuntimeError as e:
        _fail(e.message)

    console.print_json(data=report.to_response())
    raise SystemExit(0 if report.success else 1)


async def _run_test_connection(
    config: ModelOdagProvisionerConfig,
) -> ModelConnectionReport:
    async with ServiceOdagProvisioner(config) as provisioner:
        return await provisioner.test_connection()


@cli.command("check-expression")
@click.argument("app_id")
@click.argument("expression")
@click.pass_context
def check_expression_cmd(ctx: click.Context, app_id: str, expression: str) -> None:
    """Check whether EXPRESSION is valid inside APP_ID."""
    try:
        config = _load_config(ctx)
        result = asyncio.run(_run_check_expression(config, app_id, expression))
    except OdagRuntimeError as e:
        _fail(e.message)

    console.print_json(
        data={
            "appId": result.app_id,
            "expression": result.expression,
            "valid": result.valid,
            "errorMessage": result.error_message,
        }
    )
    raise SystemExit(0 if result.valid else 1)


async def _run_check_expression(
    config: ModelOdagProvisionerConfig, app_id: str, expression: str
) -> ModelExpressionCheckResult:
    async with ServiceOdagProvisioner(config) as provisioner:
        return await provisioner.check_expression(app_id, expression)


if __name__ == "__main__":
    cli()
