"""Report what `ctxfix fix` would rewrite, without touching any file."""

import sys

import click

from ctxfix.config_runtime import apply_cli_overrides, load_runtime_config
from ctxfix.pipeline.runner import run
from ctxfix.pipeline.ui import print_report
from ctxfix.utils.error_handler import handle_exceptions
from ctxfix.utils.exit_codes import ExitCodes


@click.command("scan")
@handle_exceptions
@click.option(
    "--target",
    "-t",
    default=".",
    type=click.Path(exists=True, file_okay=False),
    help="Directory holding the Go package (default: current directory)",
)
@click.option(
    "--package",
    "-p",
    "package_name",
    default=None,
    help="Go package clause to inspect (default: main)",
)
def scan(target, package_name):
    """List files and functions still using golang.org/x/net/context.

    Runs the same classification and rewrite as `fix` in memory only.
    Exits 3 when something is left to migrate, 0 otherwise, so it can
    gate CI after a migration.
    """
    cfg = apply_cli_overrides(load_runtime_config(target), package=package_name)

    report = run(target, config=cfg, write=False)
    print_report(report, verb="Would rewrite")

    if report.migrated:
        sys.exit(ExitCodes.PENDING_REWRITES)
