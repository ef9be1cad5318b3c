"""Migration core: import classification and declaration rewriting."""

from .decls import FuncRewrite, fix_decls, fix_func
from .imports import DEPRECATED_IMPORT, STANDARD_IMPORT, check_imports
from .signatures import SIGNATURES, Role, build_table, classify
from .trace import TraceSink, log_sink

__all__ = [
    "DEPRECATED_IMPORT",
    "STANDARD_IMPORT",
    "SIGNATURES",
    "FuncRewrite",
    "Role",
    "TraceSink",
    "build_table",
    "check_imports",
    "classify",
    "fix_decls",
    "fix_func",
    "log_sink",
]
