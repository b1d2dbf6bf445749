"""Hand-built syntax trees shaped like tree-sitter's Java grammar."""

from matchingref.models import SyntaxNode


def node(
    type: str,
    text: str = "",
    *children: SyntaxNode,
    field: str | None = None,
    operator: str | None = None,
) -> SyntaxNode:
    return SyntaxNode(type=type, text=text, field_name=field, operator=operator, children=list(children))


def find(root: SyntaxNode, type: str, text: str) -> SyntaxNode:
    return next(n for n in root.walk() if n.type == type and n.text == text)


def error_node(root: SyntaxNode) -> SyntaxNode:
    return next(n for n in root.walk() if n.type == "ERROR")


def int_array_missing_size() -> SyntaxNode:
    """``int[] nums = new int[];``

    The parser cannot finish the creation and leaves its tokens in an
    ``ERROR`` node next to the declarator.
    """
    return node(
        "local_variable_declaration",
        "int[] nums = new int[];",
        node("array_type", "int[]", node("integral_type", "int", field="element"), field="type"),
        node("variable_declarator", "nums", node("identifier", "nums", field="name"), field="declarator"),
        node("ERROR", "= new int[]", node("integral_type", "int"), node("dimensions", "[]")),
    )


def grid_with_illegal_dimension() -> SyntaxNode:
    """``int[][] grid = new int[][5];``"""
    return node(
        "local_variable_declaration",
        "int[][] grid = new int[][5];",
        node("array_type", "int[][]", node("integral_type", "int", field="element"), field="type"),
        node("variable_declarator", "grid", node("identifier", "grid", field="name"), field="declarator"),
        node(
            "ERROR",
            "= new int[][5]",
            node("integral_type", "int"),
            node("dimensions", "[]"),
            node("dimensions_expr", "[5]", node("decimal_integer_literal", "5")),
        ),
    )


def sized_array_with_initializer() -> SyntaxNode:
    """``float[] nums = new float[2] {1.0, 2.0};``

    The sized creation parses on its own and is wrapped in an ``ERROR``
    node inside the declarator, which keeps the initializer as its value.
    """
    creation = node(
        "array_creation_expression",
        "new float[2]",
        node("floating_point_type", "float", field="type"),
        node("dimensions_expr", "[2]", node("decimal_integer_literal", "2"), field="dimensions"),
    )
    return node(
        "local_variable_declaration",
        "float[] nums = new float[2] {1.0, 2.0};",
        node("array_type", "float[]", node("floating_point_type", "float", field="element"), field="type"),
        node(
            "variable_declarator",
            "nums = new float[2] {1.0, 2.0}",
            node("identifier", "nums", field="name"),
            node("ERROR", "= new float[2]", creation),
            node(
                "array_initializer",
                "{1.0, 2.0}",
                node("decimal_floating_point_literal", "1.0"),
                node("decimal_floating_point_literal", "2.0"),
                field="value",
            ),
            field="declarator",
        ),
    )


def well_formed_array() -> SyntaxNode:
    """``int[] nums = new int[5];``"""
    return node(
        "local_variable_declaration",
        "int[] nums = new int[5];",
        node("array_type", "int[]", node("integral_type", "int", field="element"), field="type"),
        node(
            "variable_declarator",
            "nums = new int[5]",
            node("identifier", "nums", field="name"),
            node(
                "array_creation_expression",
                "new int[5]",
                node("integral_type", "int", field="type"),
                node("dimensions_expr", "[5]", node("decimal_integer_literal", "5"), field="dimensions"),
                field="value",
            ),
            field="declarator",
        ),
    )


def call(name: str, *arguments: SyntaxNode, receiver: SyntaxNode | None = None) -> SyntaxNode:
    argument_text = ", ".join(argument.text for argument in arguments)
    prefix = f"{receiver.text}." if receiver is not None else ""
    children = [
        node("identifier", name, field="name"),
        node("argument_list", f"({argument_text})", *arguments, field="arguments"),
    ]
    if receiver is not None:
        receiver.field_name = "object"
        children.insert(0, receiver)
    return node("method_invocation", f"{prefix}{name}({argument_text})", *children)


def parameter(type_node: SyntaxNode, name: str) -> SyntaxNode:
    type_node.field_name = "type"
    return node("formal_parameter", f"{type_node.text} {name}", type_node, node("identifier", name, field="name"))


def method(return_type: SyntaxNode, name: str, *parameters: SyntaxNode, body: SyntaxNode | None = None) -> SyntaxNode:
    return_type.field_name = "type"
    parameter_text = ", ".join(p.text for p in parameters)
    children = [
        return_type,
        node("identifier", name, field="name"),
        node("formal_parameters", f"({parameter_text})", *parameters, field="parameters"),
        body if body is not None else node("block", "{}"),
    ]
    children[-1].field_name = "body"
    return node("method_declaration", f"{return_type.text} {name}({parameter_text}) {{...}}", *children)


def add_program(*arguments: SyntaxNode) -> SyntaxNode:
    """``int add(int a, int b) {...}`` next to a call of ``add`` with the given arguments."""
    declaration = method(
        node("integral_type", "int"),
        "add",
        parameter(node("integral_type", "int"), "a"),
        parameter(node("integral_type", "int"), "b"),
    )
    return node("program", "", declaration, call("add", *arguments))


def total_method(return_type: str = "int") -> SyntaxNode:
    """``int total(int a, float b) {}``"""
    type_node = node("void_type", "void") if return_type == "void" else node("integral_type", return_type)
    return method(
        type_node,
        "total",
        parameter(node("integral_type", "int"), "a"),
        parameter(node("floating_point_type", "float"), "b"),
    )


def declarator_with_value(name: str, value: SyntaxNode) -> SyntaxNode:
    value.field_name = "value"
    return node("variable_declarator", f"{name} = {value.text}", node("identifier", name, field="name"), value)


def undefined_type_field() -> SyntaxNode:
    """``Zorp z = new Zorp(), y;``"""
    creation = node(
        "object_creation_expression",
        "new Zorp()",
        node("type_identifier", "Zorp", field="type"),
        node("argument_list", "()", field="arguments"),
    )
    first = declarator_with_value("z", creation)
    first.field_name = "declarator"
    second = node("variable_declarator", "y", node("identifier", "y", field="name"), field="declarator")
    return node(
        "field_declaration", "Zorp z = new Zorp(), y;", node("type_identifier", "Zorp", field="type"), first, second
    )
