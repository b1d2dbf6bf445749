"""Unit tests for guessing the type of a missing name from its surroundings."""

import pytest
from trees import add_program, node

from matchingref.bindings.source import SourceBindings
from matchingref.core.inference import closest_expression_type
from matchingref.models import SyntaxNode


def _infer(anchor: SyntaxNode, missing_name: str = "") -> str:
    return closest_expression_type(anchor, SourceBindings(anchor.root), missing_name)


@pytest.mark.parametrize(("operator", "expected"), [("&&", "boolean"), ("*", "int"), ("==", "boolean")])
def test_infix_without_known_operand(operator: str, expected: str) -> None:
    missing = node("identifier", "a", field="left")
    node("binary_expression", f"a {operator} b", missing, node("identifier", "b", field="right"), operator=operator)
    assert _infer(missing) == expected


def test_infix_uses_known_operand() -> None:
    missing = node("identifier", "a", field="left")
    node(
        "binary_expression",
        'a + "x"',
        missing,
        node("string_literal", '"x"', field="right"),
        operator="+",
    )
    assert _infer(missing) == "String"


@pytest.mark.parametrize(("operator", "expected"), [("!", "boolean"), ("-", "int")])
def test_prefix_operators(operator: str, expected: str) -> None:
    missing = node("identifier", "a", field="operand")
    node("unary_expression", f"{operator}a", missing, operator=operator)
    assert _infer(missing) == expected


def test_argument_takes_declared_parameter_type() -> None:
    program = add_program(node("decimal_integer_literal", "1"), node("identifier", "missing"))
    missing = program.children[1].child("arguments").children[1]  # type: ignore[union-attr]
    assert _infer(missing, "missing") == "int"


def test_cast_gives_target_type() -> None:
    missing = node("identifier", "a", field="value")
    node("cast_expression", "(float) a", node("floating_point_type", "float", field="type"), missing)
    assert _infer(missing) == "float"


def test_array_initializer_gives_element_type() -> None:
    missing = node("identifier", "a")
    initializer = node("array_initializer", "{a}", missing, field="value")
    declarator = node("variable_declarator", "xs = {a}", node("identifier", "xs", field="name"), initializer)
    declarator.field_name = "declarator"
    node("local_variable_declaration", "String[] xs = {a};", node("array_type", "String[]", field="type"), declarator)
    assert _infer(missing) == "String"


def test_no_enclosing_expression_defaults_to_object() -> None:
    missing = node("identifier", "a")
    node("expression_statement", "a;", missing)
    assert _infer(missing) == "Object"
