"""Mutable view of a parsed Go file.

tree-sitter trees cannot be edited, so the parts the migration touches are
lifted into these dataclasses. Each one keeps the byte span it came from;
the printer turns the difference between the current and the original
values into source edits.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

BLANK = "_"


@dataclass
class ImportSpec:
    """One import path of the file."""

    path: str
    original_path: str
    span: tuple[int, int]
    line: int
    alias: str | None = None

    @property
    def changed(self) -> bool:
        return self.path != self.original_path


@dataclass(eq=False)
class Param:
    """One parameter declaration: ``r *http.Request`` or ``a, b int``.

    Compared by identity so the printer can tell which of the original
    parameters are gone.
    """

    names: list[str]
    type_text: str
    span: tuple[int, int]
    variadic: bool = False

    @property
    def name(self) -> str:
        """Bound name used for classification: the first declared name."""
        return self.names[0] if self.names else ""

    @property
    def referenceable(self) -> bool:
        return self.name not in ("", BLANK)


@dataclass
class Ident:
    """Identifier reference inside a function body."""

    name: str
    original_name: str
    span: tuple[int, int]
    line: int

    @property
    def changed(self) -> bool:
        return self.name != self.original_name


@dataclass
class FuncDecl:
    """Top-level function or method declaration."""

    name: str
    kind: str
    line: int
    params: list[Param]
    original_params: list[Param]
    idents: list[Ident] = field(default_factory=list)
    body: Any = None
    receiver: str | None = None

    @property
    def removed_params(self) -> list[Param]:
        kept = {id(p) for p in self.params}
        return [p for p in self.original_params if id(p) not in kept]


@dataclass
class OtherDecl:
    """Any other top-level declaration (types, vars, consts); never rewritten."""

    kind: str
    line: int


@dataclass
class SourceFile:
    """A parsed Go file and everything the migration may mutate in it."""

    path: Path
    package: str
    source: bytes
    tree: Any
    imports: list[ImportSpec] = field(default_factory=list)
    decls: list[FuncDecl | OtherDecl] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def funcs(self) -> list[FuncDecl]:
        return [d for d in self.decls if isinstance(d, FuncDecl)]

    @property
    def changed(self) -> bool:
        if any(imp.changed for imp in self.imports):
            return True
        for decl in self.funcs:
            if decl.removed_params or any(i.changed for i in decl.idents):
                return True
        return False
