"""Migrate a Go package from golang.org/x/net/context to stdlib context."""

import click

from ctxfix.config_runtime import apply_cli_overrides, load_runtime_config
from ctxfix.pipeline.runner import run
from ctxfix.pipeline.ui import print_report
from ctxfix.utils.error_handler import handle_exceptions


@click.command("fix")
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
    help="Go package clause to migrate (default: main)",
)
@click.option(
    "--gofmt/--no-gofmt",
    "use_gofmt",
    default=None,
    help="Pipe rewritten files through gofmt before writing",
)
@click.option(
    "--shadowing",
    type=click.Choice(["ignore", "respect"]),
    default=None,
    help="Rename shadowed inner bindings too (ignore) or leave them alone (respect)",
)
@click.option("--diff", "show_diff", is_flag=True, help="Print unified diffs instead of writing files")
def fix(target, package_name, use_gofmt, shadowing, show_diff):
    """Rewrite x/net/context handlers to use (*http.Request).Context().

    For every file of the package importing golang.org/x/net/context:

    \b
      1. The import path becomes "context".
      2. Functions taking both a context.Context and an *http.Request
         lose the context parameter.
      3. References to that parameter in the body become r.Context().

    Files that do not import golang.org/x/net/context are left untouched.
    Any parse, print or write error aborts the run; files already written
    stay written.

    \b
    EXAMPLES:
      ctxfix fix                        # migrate package main in .
      ctxfix fix -t ./cmd/server        # another directory
      ctxfix fix --diff                 # preview without writing
      ctxfix fix --gofmt                # canonical formatting afterwards
    """
    cfg = apply_cli_overrides(
        load_runtime_config(target),
        package=package_name,
        shadowing=shadowing,
        gofmt=use_gofmt,
    )

    report = run(
        target,
        config=cfg,
        write=not show_diff,
        diff_sink=(lambda diff: click.echo(diff, nl=False)) if show_diff else None,
    )

    print_report(report, verb="Would rewrite" if show_diff else "Rewrote")
