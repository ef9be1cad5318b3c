"""Lexical shadowing analysis for function bodies.

Used by the ``respect`` shadowing mode: finds the identifier occurrences of
a name that belong to an inner binding of that name rather than to the
function parameter. Go puts parameters in the same scope as the top level
of the body, so only declarations in nested scopes shadow.
"""

from typing import Any

from ctxfix.go.nodes import find_children_by_type, get_node_text, named_children, span

SCOPE_NODES = {
    "block",
    "if_statement",
    "for_statement",
    "expression_switch_statement",
    "type_switch_statement",
    "select_statement",
    "expression_case",
    "type_case",
    "default_case",
    "communication_case",
    "func_literal",
}

DEFINE_NODES = {"short_var_declaration", "receive_statement", "range_clause"}


def _has_define(node: Any) -> bool:
    return any(not child.is_named and child.type == ":=" for child in node.children)


def _bound_names(node: Any) -> list[str]:
    if node is None:
        return []
    if node.type == "identifier":
        return [get_node_text(node)]
    return [get_node_text(c) for c in named_children(node) if c.type == "identifier"]


def _literal_param_names(node: Any) -> list[str]:
    names = []
    for field_name in ("parameters", "result"):
        param_list = node.child_by_field_name(field_name)
        if param_list is None or param_list.type != "parameter_list":
            continue
        for decl in named_children(param_list):
            names.extend(get_node_text(n) for n in find_children_by_type(decl, "identifier"))
    return names


class _ShadowWalker:
    def __init__(self, name: str):
        self.name = name
        self.spans: set[tuple[int, int]] = set()

    def walk(self, node: Any, shadowed: bool, binds: bool) -> bool:
        """Visit node; return the shadowing state for the following siblings."""
        kind = node.type

        if kind == "identifier":
            if shadowed and get_node_text(node) == self.name:
                self.spans.add(span(node))
            return shadowed

        if kind in DEFINE_NODES and _has_define(node):
            left = node.child_by_field_name("left")
            right = node.child_by_field_name("right")
            if right is not None:
                self.walk(right, shadowed, binds)
            new = shadowed or (binds and self.name in _bound_names(left))
            if left is not None:
                self.walk(left, new, binds)
            return new

        if kind in ("var_spec", "const_spec"):
            value = node.child_by_field_name("value")
            if value is not None:
                self.walk(value, shadowed, binds)
            names = find_children_by_type(node, "identifier")
            new = shadowed or (binds and self.name in [get_node_text(n) for n in names])
            for name_node in names:
                self.walk(name_node, new, binds)
            return new

        if kind == "func_literal":
            local = shadowed or self.name in _literal_param_names(node)
            for child in node.children:
                self.walk(child, local, True)
            return shadowed

        if kind == "type_switch_statement":
            self._walk_type_switch(node, shadowed)
            return shadowed

        if kind in SCOPE_NODES:
            local = shadowed
            for child in node.children:
                local = self.walk(child, local, True)
            return shadowed

        state = shadowed
        for child in node.children:
            state = self.walk(child, state, binds)
        return state

    def _walk_type_switch(self, node: Any, shadowed: bool) -> None:
        # The alias is bound after the switched value is evaluated.
        alias = node.child_by_field_name("alias")
        value = node.child_by_field_name("value")
        local = shadowed
        for child in node.children:
            if alias is not None and child == alias:
                continue
            local = self.walk(child, local, True)
            if value is not None and child == value and alias is not None:
                local = local or self.name in _bound_names(alias)
                self.walk(alias, local, True)


def shadowed_spans(body: Any, name: str) -> set[tuple[int, int]]:
    """Spans of identifiers named ``name`` that refer to an inner binding."""
    if body is None or not name:
        return set()

    walker = _ShadowWalker(name)
    state = False
    for child in body.children:
        state = walker.walk(child, state, False)
    return walker.spans
