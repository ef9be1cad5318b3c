"""Run the migration over one Go package directory.

Per file: classify imports -> rewrite declarations -> render -> persist.
Files are handled one at a time in sorted path order. Nothing here catches
errors: a parse, print or write failure ends the run, and files written
before it keep their new content.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ctxfix.config_runtime import load_runtime_config
from ctxfix.fixer import TraceSink, build_table, check_imports, fix_decls, log_sink
from ctxfix.fixer.decls import FuncRewrite
from ctxfix.go.parser import GoParser
from ctxfix.go.printer import gofmt, render, unified_diff, write_file
from ctxfix.utils.logging import logger


@dataclass
class FileResult:
    """Outcome for one file of the package."""

    path: Path
    imports_deprecated: bool
    rewrites: list[FuncRewrite] = field(default_factory=list)
    changed: bool = False


@dataclass
class RunReport:
    """Outcome of a whole run."""

    root: Path
    package: str
    written: bool
    files: list[FileResult] = field(default_factory=list)

    @property
    def migrated(self) -> list[FileResult]:
        return [f for f in self.files if f.imports_deprecated]

    @property
    def skipped(self) -> list[FileResult]:
        return [f for f in self.files if not f.imports_deprecated]

    @property
    def function_count(self) -> int:
        return sum(len(f.rewrites) for f in self.files)


def run(
    root: Path | str = ".",
    config: dict[str, Any] | None = None,
    trace: TraceSink = log_sink,
    write: bool = True,
    diff_sink: Callable[[str], None] | None = None,
    parser: GoParser | None = None,
) -> RunReport:
    """Migrate the configured package of ``root``.

    Args:
        root: Directory holding the Go package
        config: Runtime config; loaded from ``root`` when omitted
        trace: Sink for the per-file / per-function progress trace
        write: Persist rendered files; False leaves the disk untouched
        diff_sink: Receives a unified diff for every changed file
        parser: Go parser to reuse

    Returns:
        RunReport describing every file of the package
    """
    root = Path(root)
    if config is None:
        config = load_runtime_config(root)
    parser = parser or GoParser()

    package = config["target"]["package"]
    report = RunReport(root=root, package=package, written=write)

    packages = parser.parse_dir(root)
    files = packages.get(package)
    if not files:
        logger.warning("No Go files for package {!r} in {}", package, root)
        return report

    table = build_table(config)
    shadowing = config["rewrite"]["shadowing"]

    for source_file in files:
        if not check_imports(
            source_file,
            deprecated=config["imports"]["deprecated"],
            standard=config["imports"]["standard"],
            trace=trace,
        ):
            report.files.append(FileResult(path=source_file.path, imports_deprecated=False))
            continue

        rewrites = fix_decls(source_file, table=table, shadowing=shadowing, trace=trace)

        data = render(source_file)
        if config["rewrite"]["gofmt"]:
            data = gofmt(data, source_file.path, timeout=config["timeouts"]["gofmt"])

        changed = data != source_file.source
        if changed and diff_sink is not None:
            diff_sink(unified_diff(source_file, data))
        if write:
            write_file(source_file.path, data)
            logger.debug("Wrote {}", source_file.path)

        report.files.append(
            FileResult(
                path=source_file.path,
                imports_deprecated=True,
                rewrites=rewrites,
                changed=changed,
            )
        )

    return report
