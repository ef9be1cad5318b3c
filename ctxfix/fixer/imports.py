"""Import classification: the gate in front of declaration rewriting."""

from ctxfix.go.model import SourceFile

from .trace import TraceSink, log_sink

DEPRECATED_IMPORT = "golang.org/x/net/context"
STANDARD_IMPORT = "context"


def check_imports(
    file: SourceFile,
    deprecated: str = DEPRECATED_IMPORT,
    standard: str = STANDARD_IMPORT,
    trace: TraceSink = log_sink,
) -> bool:
    """Rewrite the deprecated import to the standard one.

    Only the first matching import is rewritten; its alias and position in
    the import list are kept.

    Returns:
        True if the file imported the deprecated path, False otherwise
    """
    for imp in file.imports:
        if imp.path == deprecated:
            imp.path = standard
            trace(f"Checking file: {file.name} - imports context")
            return True

    trace(f"Checking file: {file.name} - does not import context")
    return False
