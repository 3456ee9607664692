"""careride command line: global flags, settings and the command groups."""

from __future__ import annotations

from typing import Any

import click

from careride import __version__
from careride.commands import register_commands
from careride.commands._context import AppContext
from careride.config.settings import CareSettings

_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _identity_overrides(patient: str | None, doctor: str | None) -> dict[str, Any]:
    identity = {
        key: value
        for key, value in (("patient_id", patient), ("doctor_id", doctor))
        if value
    }
    return {"identity": identity} if identity else {}


@click.group(invoke_without_command=True, context_settings=_CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="careride")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print ids or a single status word only.")
@click.option("-v", "--verbose", is_flag=True, help="Show ranking reasons, timings and debug logs.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Use this careride.toml instead of searching for one.",
)
@click.option("--patient", "patient_id", default=None, help="Act as this patient id.")
@click.option("--doctor", "doctor_id", default=None, help="Act as this doctor id.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    patient_id: str | None,
    doctor_id: str | None,
) -> None:
    """Find doctors, message them, and manage subscriptions and boosts."""
    settings = CareSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        **_identity_overrides(patient_id, doctor_id),
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
