"""Declaration rewriting.

For every top-level function or method that takes both a context and a
request parameter, drop the context parameter and point the body's
references to it at ``<request>.Context()``.
"""

from dataclasses import dataclass

from ctxfix.go.model import FuncDecl, SourceFile
from ctxfix.utils.logging import logger

from .scope import shadowed_spans
from .signatures import SIGNATURES, Role, classify
from .trace import TraceSink, log_sink


@dataclass
class FuncRewrite:
    """What happened to one rewritten function."""

    func_name: str
    line: int
    ctx_name: str
    req_name: str
    removed_index: int
    renamed: int


def _rename_references(decl: FuncDecl, ctx_name: str, replacement: str, shadowing: str) -> int:
    """Rename body identifiers equal to ctx_name; return how many changed."""
    if not ctx_name or ctx_name == "_":
        return 0

    skip = shadowed_spans(decl.body, ctx_name) if shadowing == "respect" else set()

    renamed = 0
    for ident in decl.idents:
        if ident.name == ctx_name and ident.span not in skip:
            ident.name = replacement
            renamed += 1
    return renamed


def fix_func(
    decl: FuncDecl,
    table: dict[str, Role] = SIGNATURES,
    shadowing: str = "ignore",
    trace: TraceSink = log_sink,
) -> FuncRewrite | None:
    """Rewrite one declaration if it is eligible; return None otherwise."""
    prefix = f"Checking function: {decl.name}"

    if not decl.params:
        trace(f"{prefix} - does not have parameters")
        return None

    ctx_index: int | None = None
    ctx_name = ""
    req_name = ""
    for i, param in enumerate(decl.params):
        role = classify(param.type_text, table)
        if role is Role.CONTEXT:
            if ctx_index is not None:
                logger.warning(
                    "{}: more than one context parameter, using {!r} at position {}",
                    decl.name,
                    param.name,
                    i,
                )
            ctx_index = i
            ctx_name = param.name
        elif role is Role.REQUEST and param.referenceable:
            req_name = param.name

    if ctx_index is None:
        trace(f"{prefix} - does not accept context.Context")
        return None
    if not req_name:
        trace(f"{prefix} - does not accept *http.Request (leaving it alone)")
        return None

    trace(f"{prefix} - accepts context.Context ident \"{ctx_name}\" and *http.Request as \"{req_name}\"")

    del decl.params[ctx_index]
    renamed = _rename_references(decl, ctx_name, f"{req_name}.Context()", shadowing)

    return FuncRewrite(
        func_name=decl.name,
        line=decl.line,
        ctx_name=ctx_name,
        req_name=req_name,
        removed_index=ctx_index,
        renamed=renamed,
    )


def fix_decls(
    file: SourceFile,
    table: dict[str, Role] = SIGNATURES,
    shadowing: str = "ignore",
    trace: TraceSink = log_sink,
) -> list[FuncRewrite]:
    """Rewrite every eligible top-level function of a file in place."""
    rewrites = []
    for decl in file.funcs:
        result = fix_func(decl, table, shadowing, trace)
        if result is not None:
            rewrites.append(result)
    return rewrites
