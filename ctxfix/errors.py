"""Exception hierarchy for ctxfix.

Every error raised here is fatal to a run: the pipeline never catches them,
the CLI converts them to a non-zero exit.
"""

from pathlib import Path


class CtxfixError(Exception):
    """Base class for all ctxfix failures."""


class GoSyntaxError(CtxfixError):
    """A Go source file could not be parsed cleanly."""

    def __init__(self, path: Path | str, line: int, column: int, message: str):
        self.path = Path(path)
        self.line = line
        self.column = column
        self.message = message
        super().__init__(f"{self.path}:{line}:{column}: {message}")


class PrintError(CtxfixError):
    """A mutated tree could not be rendered back to source."""


class PersistError(CtxfixError):
    """Rendered source could not be written back to disk."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot write {self.path}: {reason}")
