from collections.abc import Callable

from matchingref.core.context import argument_nodes
from matchingref.core.ports.bindings import TypeBindings
from matchingref.models import SyntaxNode

_DEFAULT_TYPE = "Object"

_BOOLEAN_INFIX = frozenset({"||", "&&"})
_NUMERIC_INFIX = frozenset(
    {"*", "/", "%", "+", "-", "<<", ">>", ">>>", "<", ">", "<=", ">=", "^", "|", "&"}
)

TypeGetter = Callable[[str, SyntaxNode, TypeBindings], str | None]


def _from_prefix(missing_name: str, node: SyntaxNode, bindings: TypeBindings) -> str:
    # The other prefix operators also apply to floating point values, but all of them apply to integers.
    return "boolean" if node.operator == "!" else "int"


def _from_infix(missing_name: str, node: SyntaxNode, bindings: TypeBindings) -> str:
    for side in ("left", "right"):
        operand = node.child(side)
        resolved = bindings.expression_type(operand) if operand is not None else None
        if resolved is not None:
            return resolved

    if node.operator in _BOOLEAN_INFIX:
        return "boolean"
    if node.operator in _NUMERIC_INFIX:
        return "int"
    return "boolean"


def _from_declarator(missing_name: str, node: SyntaxNode, bindings: TypeBindings) -> str | None:
    return bindings.variable_type(node)


def _from_array_initializer(missing_name: str, node: SyntaxNode, bindings: TypeBindings) -> str | None:
    parent = node.parent
    array_type = None
    if parent is not None and parent.type == "variable_declarator":
        array_type = bindings.variable_type(parent)
    elif parent is not None and parent.type == "array_creation_expression":
        array_type = bindings.expression_type(parent)
    if array_type is None or not array_type.endswith("[]"):
        return None
    return array_type[:-2]


def _from_cast(missing_name: str, node: SyntaxNode, bindings: TypeBindings) -> str | None:
    type_node = node.child("type")
    return type_node.text if type_node is not None else None


def _from_invocation(missing_name: str, node: SyntaxNode, bindings: TypeBindings) -> str | None:
    binding = bindings.invoked_method(node)
    if binding is None:
        return None

    provided = [argument.text for argument in argument_nodes(node)]
    if missing_name not in provided:
        return _DEFAULT_TYPE
    index = provided.index(missing_name)
    return binding.parameter_types[index] if index < len(binding.parameter_types) else _DEFAULT_TYPE


def _from_assignment(missing_name: str, node: SyntaxNode, bindings: TypeBindings) -> str | None:
    return bindings.expression_type(node)


def _constant(type_name: str) -> TypeGetter:
    def getter(missing_name: str, node: SyntaxNode, bindings: TypeBindings) -> str:
        return type_name

    return getter


_TYPE_GETTERS: dict[str, TypeGetter] = {
    "unary_expression": _from_prefix,
    "binary_expression": _from_infix,
    "update_expression": _constant("int"),
    "ternary_expression": _constant("boolean"),
    "instanceof_expression": _constant(_DEFAULT_TYPE),
    "variable_declarator": _from_declarator,
    "array_creation_expression": _constant("int"),
    "array_access": _constant("int"),
    "array_initializer": _from_array_initializer,
    "cast_expression": _from_cast,
    "method_invocation": _from_invocation,
    "assignment_expression": _from_assignment,
}


def closest_expression_type(anchor: SyntaxNode, bindings: TypeBindings, missing_name: str = "") -> str:
    """Guess the type a missing name needs from the nearest enclosing expression.

    Falls back to ``Object`` when no enclosing expression says anything useful.
    """
    for node in anchor.ancestors():
        getter = _TYPE_GETTERS.get(node.type)
        if getter is not None:
            return getter(missing_name, node, bindings) or _DEFAULT_TYPE
    return _DEFAULT_TYPE
