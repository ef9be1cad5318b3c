"""Central UI handler for ctxfix.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every command file.
"""

import sys

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

CTXFIX_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "success": "bold green",
    "cmd": "bold magenta",
    "path": "bold cyan",
    "dim": "dim white",
})

# Single console instance - import this, don't create your own
console = Console(
    theme=CTXFIX_THEME,
    force_terminal=sys.stdout.isatty()
)


def print_header(title: str) -> None:
    """Print a styled section header with horizontal rules."""
    console.rule(f"[bold]{title}[/bold]")


def print_warning(msg: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[warning]WARNING:[/warning] {msg}")


def print_success(msg: str) -> None:
    """Print a success message in green."""
    console.print(f"[success]OK:[/success] {msg}")


def print_report(report, verb: str = "Rewrote") -> None:
    """Print a table of the files and functions a run rewrote."""
    print_header(f"ctxfix: package {report.package}")

    if not report.files:
        print_warning(f"no Go files for package '{report.package}' in {report.root}")
        return

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2, 0, 0))
    table.add_column("File", style="path")
    table.add_column("Function")
    table.add_column("Removed", style="dim")
    table.add_column("Refs", justify="right")

    for result in report.migrated:
        if not result.rewrites:
            table.add_row(result.path.name, "[dim](import only)[/dim]", "", "")
        for rewrite in result.rewrites:
            table.add_row(
                result.path.name,
                f"{rewrite.func_name}:{rewrite.line}",
                rewrite.ctx_name or "_",
                str(rewrite.renamed),
            )

    if report.migrated:
        console.print(table)

    console.print(
        f"[info]{len(report.files)}[/info] files checked, "
        f"[info]{len(report.migrated)}[/info] importing context, "
        f"[info]{report.function_count}[/info] functions"
    )
    if report.migrated:
        print_success(f"{verb} {len(report.migrated)} file(s)")
    else:
        print_success("nothing to migrate")
