"""Unit tests for the syntax-only type bindings."""

import pytest
from trees import add_program, call, declarator_with_value, node, parameter

from matchingref.bindings import SourceBindings
from matchingref.models import MethodBinding, SyntaxNode


def _expression_type(expression: SyntaxNode) -> str | None:
    return SourceBindings(expression).expression_type(expression)


@pytest.mark.parametrize(
    ("literal", "text", "expected"),
    [
        ("decimal_integer_literal", "42", "int"),
        ("decimal_integer_literal", "42L", "long"),
        ("hex_integer_literal", "0xFF", "int"),
        ("decimal_floating_point_literal", "1.5", "float"),
        ("decimal_floating_point_literal", "1.5f", "float"),
        ("decimal_floating_point_literal", "1.5d", "double"),
        ("true", "true", "boolean"),
        ("character_literal", "'c'", "char"),
        ("string_literal", '"s"', "String"),
    ],
)
def test_literal_types(literal: str, text: str, expected: str) -> None:
    assert _expression_type(node(literal, text)) == expected


@pytest.mark.parametrize(
    ("left", "operator", "right", "expected"),
    [
        (("decimal_integer_literal", "1"), "+", ("decimal_floating_point_literal", "2.0"), "float"),
        (("decimal_integer_literal", "1"), "+", ("string_literal", '"s"'), "String"),
        (("decimal_integer_literal", "1"), "<", ("decimal_integer_literal", "2"), "boolean"),
        (("character_literal", "'a'"), "+", ("character_literal", "'b'"), "int"),
        (("decimal_integer_literal", "1"), "<<", ("decimal_integer_literal", "2L"), "int"),
        (("true", "true"), "&", ("false", "false"), "boolean"),
    ],
)
def test_binary_expression_types(
    left: tuple[str, str], operator: str, right: tuple[str, str], expected: str
) -> None:
    expression = node(
        "binary_expression",
        f"{left[1]} {operator} {right[1]}",
        node(*left, field="left"),
        node(*right, field="right"),
        operator=operator,
    )
    assert _expression_type(expression) == expected


def test_negation_is_boolean() -> None:
    expression = node("unary_expression", "!x", node("identifier", "x", field="operand"), operator="!")
    assert _expression_type(expression) == "boolean"


def test_identifier_resolves_local_declaration() -> None:
    declarator = declarator_with_value("count", node("decimal_integer_literal", "0"))
    declarator.field_name = "declarator"
    use = node("identifier", "count")
    block = node(
        "block",
        "{ int count = 0; count; }",
        node("local_variable_declaration", "int count = 0;", node("integral_type", "int", field="type"), declarator),
        node("expression_statement", "count;", use),
    )
    assert SourceBindings(block).expression_type(use) == "int"


def test_identifier_resolves_parameter_with_dimensions() -> None:
    use = node("identifier", "values")
    declaration = node(
        "method_declaration",
        "void sum(int[] values) { values; }",
        node("void_type", "void", field="type"),
        node("identifier", "sum", field="name"),
        node(
            "formal_parameters",
            "(int[] values)",
            parameter(node("array_type", "int[]"), "values"),
            field="parameters",
        ),
        node("block", "{ values; }", node("expression_statement", "values;", use), field="body"),
    )
    assert SourceBindings(declaration).expression_type(use) == "int[]"


def test_unknown_identifier_is_unresolved() -> None:
    assert _expression_type(node("identifier", "ghost")) is None


def test_invoked_method_prefers_matching_arity() -> None:
    program = add_program(node("decimal_integer_literal", "1"), node("decimal_integer_literal", "2"))
    binding = SourceBindings(program).invoked_method(program.children[1])
    assert binding == MethodBinding(name="add", parameter_types=("int", "int"), return_type="int")


def test_invoked_method_on_other_receiver_is_unresolved() -> None:
    invocation = call("add", receiver=node("identifier", "calculator"))
    assert SourceBindings(invocation).invoked_method(invocation) is None


def test_call_expression_has_return_type() -> None:
    program = add_program(node("decimal_integer_literal", "1"), node("decimal_integer_literal", "2"))
    assert SourceBindings(program).expression_type(program.children[1]) == "int"


def test_variable_type_adds_declarator_dimensions() -> None:
    declarator = node(
        "variable_declarator",
        "grid[]",
        node("identifier", "grid", field="name"),
        node("dimensions", "[]", field="dimensions"),
        field="declarator",
    )
    node("field_declaration", "int grid[];", node("integral_type", "int", field="type"), declarator)
    assert SourceBindings(declarator.root).variable_type(declarator) == "int[]"
