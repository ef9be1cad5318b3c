"""Canonical rendering of Go type expressions.

Parameter classification compares rendered type text against fixed
signatures, so the rendering must not depend on how the source was spaced:
``* http.Request`` and ``*http.Request`` both render as ``*http.Request``.
"""

from typing import Any

from .nodes import get_node_text, named_children

_LEAF_TYPES = {
    "type_identifier",
    "identifier",
    "package_identifier",
    "field_identifier",
}


def _collapse(text: str) -> str:
    return " ".join(text.split())


def _render_channel(node: Any) -> str:
    value = node.child_by_field_name("value")
    tokens = [child.type for child in node.children if not child.is_named]
    if tokens and tokens[0] == "<-":
        prefix = "<-chan "
    elif "<-" in tokens:
        prefix = "chan<- "
    else:
        prefix = "chan "
    return prefix + render_type(value)


def render_type(node: Any) -> str:
    """Render a type-expression node to canonical text."""
    if node is None:
        return ""

    kind = node.type

    if kind in _LEAF_TYPES:
        return get_node_text(node)

    if kind == "qualified_type":
        package = node.child_by_field_name("package")
        name = node.child_by_field_name("name")
        return f"{get_node_text(package)}.{get_node_text(name)}"

    if kind == "pointer_type":
        inner = named_children(node)
        return "*" + (render_type(inner[0]) if inner else "")

    if kind == "slice_type":
        return "[]" + render_type(node.child_by_field_name("element"))

    if kind == "array_type":
        length = _collapse(get_node_text(node.child_by_field_name("length")))
        return f"[{length}]" + render_type(node.child_by_field_name("element"))

    if kind == "implicit_length_array_type":
        return "[...]" + render_type(node.child_by_field_name("element"))

    if kind == "map_type":
        key = render_type(node.child_by_field_name("key"))
        value = render_type(node.child_by_field_name("value"))
        return f"map[{key}]{value}"

    if kind == "channel_type":
        return _render_channel(node)

    if kind == "parenthesized_type":
        inner = named_children(node)
        return render_type(inner[0]) if inner else ""

    if kind == "generic_type":
        base = render_type(node.child_by_field_name("type"))
        args = node.child_by_field_name("type_arguments")
        rendered = ", ".join(render_type(arg) for arg in named_children(args))
        return f"{base}[{rendered}]"

    if kind == "type_elem":
        return " | ".join(render_type(part) for part in named_children(node))

    if kind == "negated_type":
        inner = named_children(node)
        return "~" + (render_type(inner[0]) if inner else "")

    return _collapse(get_node_text(node))
