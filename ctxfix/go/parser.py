"""Go parsing via tree-sitter, lifted into the mutable model."""

from pathlib import Path
from typing import Any

from tree_sitter_language_pack import get_parser

from ctxfix.errors import GoSyntaxError
from ctxfix.utils.logging import logger

from .model import FuncDecl, Ident, ImportSpec, OtherDecl, Param, SourceFile
from .nodes import (
    find_child_by_type,
    find_children_by_type,
    get_node_text,
    iter_nodes,
    line_of,
    named_children,
    span,
)
from .types import render_type

FUNC_KINDS = {
    "function_declaration": "function",
    "method_declaration": "method",
}

# Top-level children that are not declarations.
_NON_DECLS = {"package_clause", "comment"}


def _first_syntax_error(root: Any) -> Any | None:
    for node in iter_nodes(root):
        if node.type == "ERROR" or node.is_missing:
            return node
    return None


def extract_package(root: Any) -> str:
    """Return the package clause name, or an empty string."""
    clause = find_child_by_type(root, "package_clause")
    return get_node_text(find_child_by_type(clause, "package_identifier"))


def extract_imports(root: Any) -> list[ImportSpec]:
    """Extract import specs in declaration order."""
    imports = []

    for import_decl in find_children_by_type(root, "import_declaration"):
        specs = find_children_by_type(import_decl, "import_spec")
        spec_list = find_child_by_type(import_decl, "import_spec_list")
        if spec_list:
            specs.extend(find_children_by_type(spec_list, "import_spec"))

        for spec in specs:
            path_node = spec.child_by_field_name("path")
            if path_node is None:
                continue
            path = get_node_text(path_node)[1:-1]
            alias_node = spec.child_by_field_name("name")
            imports.append(
                ImportSpec(
                    path=path,
                    original_path=path,
                    span=span(path_node),
                    line=line_of(spec),
                    alias=get_node_text(alias_node) if alias_node else None,
                )
            )

    return imports


def extract_params(param_list: Any) -> list[Param]:
    """Parse a parameter list into Param records, one per declaration."""
    params = []

    for decl in named_children(param_list):
        if decl.type not in ("parameter_declaration", "variadic_parameter_declaration"):
            continue

        type_text = render_type(decl.child_by_field_name("type"))
        variadic = decl.type == "variadic_parameter_declaration"
        if variadic:
            type_text = "..." + type_text

        params.append(
            Param(
                names=[get_node_text(n) for n in find_children_by_type(decl, "identifier")],
                type_text=type_text,
                span=span(decl),
                variadic=variadic,
            )
        )

    return params


def extract_idents(body: Any) -> list[Ident]:
    """Collect every identifier leaf of a function body, in source order."""
    idents = []
    for node in iter_nodes(body):
        if node.type == "identifier":
            name = get_node_text(node)
            idents.append(Ident(name=name, original_name=name, span=span(node), line=line_of(node)))
    return idents


def extract_func(node: Any) -> FuncDecl:
    """Build a FuncDecl from a function or method declaration node."""
    params = extract_params(node.child_by_field_name("parameters"))
    body = node.child_by_field_name("body")
    receiver = node.child_by_field_name("receiver")

    return FuncDecl(
        name=get_node_text(node.child_by_field_name("name")),
        kind=FUNC_KINDS[node.type],
        line=line_of(node),
        params=params,
        original_params=list(params),
        idents=extract_idents(body) if body is not None else [],
        body=body,
        receiver=get_node_text(receiver) if receiver is not None else None,
    )


def extract_decls(root: Any) -> list[FuncDecl | OtherDecl]:
    """Extract top-level declarations in source order."""
    decls: list[FuncDecl | OtherDecl] = []
    for node in named_children(root):
        if node.type in FUNC_KINDS:
            decls.append(extract_func(node))
        elif node.type not in _NON_DECLS:
            decls.append(OtherDecl(kind=node.type, line=line_of(node)))
    return decls


class GoParser:
    """Parses Go sources with the tree-sitter Go grammar."""

    def __init__(self):
        """Load the Go grammar from tree-sitter-language-pack."""
        try:
            self.parser = get_parser("go")
        except Exception as e:
            raise RuntimeError(
                f"Failed to load tree-sitter grammar for Go: {e}\n"
                "Please try: pip install --force-reinstall tree-sitter-language-pack"
            ) from e

    def parse_bytes(self, source: bytes, path: Path | str = "<memory>") -> SourceFile:
        """Parse Go source bytes.

        Raises:
            GoSyntaxError: If the tree contains an error or missing node
        """
        path = Path(path)
        tree = self.parser.parse(source)
        root = tree.root_node

        if root.has_error:
            bad = _first_syntax_error(root)
            if bad is None:
                bad = root
            message = f"missing {bad.type}" if bad.is_missing else "syntax error"
            raise GoSyntaxError(path, bad.start_point[0] + 1, bad.start_point[1] + 1, message)

        return SourceFile(
            path=path,
            package=extract_package(root),
            source=source,
            tree=tree,
            imports=extract_imports(root),
            decls=extract_decls(root),
        )

    def parse_file(self, path: Path | str) -> SourceFile:
        """Read and parse one Go file."""
        path = Path(path)
        return self.parse_bytes(path.read_bytes(), path)

    def parse_dir(self, root: Path | str) -> dict[str, list[SourceFile]]:
        """Parse every .go file of a directory, grouped by package name.

        Every file is parsed before anything is returned, so a syntax error
        anywhere aborts the run before a single file is rewritten.
        """
        root = Path(root)
        packages: dict[str, list[SourceFile]] = {}

        for path in sorted(p for p in root.iterdir() if p.suffix == ".go" and p.is_file()):
            source_file = self.parse_file(path)
            packages.setdefault(source_file.package, []).append(source_file)
            logger.debug("Parsed {} (package {})", path, source_file.package)

        return packages
