"""ctxfix CLI - Main entry point and command registration hub."""
# ruff: noqa: E402 - Intentional lazy loading: commands imported after cli group definition

import click

from ctxfix import __version__
from ctxfix.utils.logging import set_level


@click.group()
@click.version_option(version=__version__, prog_name="ctxfix")
@click.help_option("-h", "--help")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Console log level (default: CTXFIX_LOG_LEVEL or INFO)",
)
def cli(log_level):
    """ctxfix - golang.org/x/net/context to stdlib context migration

    \b
    QUICK START:
      ctxfix scan               # What would change?
      ctxfix fix --diff         # Preview the rewrite
      ctxfix fix                # Rewrite package main in place

    \b
    For detailed options: ctxfix <command> --help"""
    if log_level:
        set_level(log_level)


from ctxfix.commands.fix import fix
from ctxfix.commands.scan import scan

cli.add_command(fix)
cli.add_command(scan)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
