"""Type bindings answered from the syntax tree alone.

Processing sketches are the target, so an unsuffixed floating point
literal is a ``float`` rather than Java's ``double``.
"""

from __future__ import annotations

from matchingref.models import MethodBinding, SyntaxNode

_INTEGER_LITERALS = frozenset(
    {"decimal_integer_literal", "hex_integer_literal", "octal_integer_literal", "binary_integer_literal"}
)
_FLOATING_LITERALS = frozenset({"decimal_floating_point_literal", "hex_floating_point_literal"})
_NUMERIC_RANK = ("byte", "short", "char", "int", "long", "float", "double")
_COMPARISON_OPERATORS = frozenset({"<", ">", "<=", ">=", "==", "!="})
_LOGICAL_OPERATORS = frozenset({"&&", "||"})
_SHIFT_OPERATORS = frozenset({"<<", ">>", ">>>"})
_DECLARATION_NODES = frozenset({"local_variable_declaration", "field_declaration"})
_CALLABLE_NODES = frozenset({"method_declaration", "constructor_declaration"})


def _promote(*types: str) -> str:
    widest = max(types, key=_NUMERIC_RANK.index)
    if _NUMERIC_RANK.index(widest) < _NUMERIC_RANK.index("int"):
        return "int"
    return widest


def _dimension_suffix(node: SyntaxNode | None) -> str:
    if node is None:
        return ""
    return "[]" * node.text.count("[")


def _strip_dimension(type_name: str) -> str | None:
    if not type_name.endswith("[]"):
        return None
    return type_name[:-2]


class SourceBindings:
    """Implements the ``TypeBindings`` protocol for a single compilation unit."""

    def __init__(self, root: SyntaxNode) -> None:
        self._root = root

    def expression_type(self, node: SyntaxNode) -> str | None:
        kind = node.type

        if kind in _INTEGER_LITERALS:
            return "long" if node.text.lower().endswith("l") else "int"
        if kind in _FLOATING_LITERALS:
            return "double" if node.text.lower().endswith("d") else "float"
        if kind in ("true", "false"):
            return "boolean"
        if kind == "character_literal":
            return "char"
        if kind in ("string_literal", "text_block"):
            return "String"
        if kind == "identifier":
            return self._identifier_type(node)
        if kind == "this":
            return self._enclosing_class_name(node)
        if kind in ("parenthesized_expression", "update_expression"):
            return self.expression_type(node.children[0]) if node.children else None
        if kind in ("object_creation_expression", "cast_expression"):
            type_node = node.child("type")
            return type_node.text if type_node else None
        if kind == "array_creation_expression":
            return self._array_creation_type(node)
        if kind == "array_access":
            array = node.child("array")
            array_type = self.expression_type(array) if array else None
            return _strip_dimension(array_type) if array_type else None
        if kind == "method_invocation":
            binding = self.invoked_method(node)
            return binding.return_type if binding else None
        if kind == "assignment_expression":
            left = node.child("left")
            return self.expression_type(left) if left else None
        if kind == "ternary_expression":
            consequence = node.child("consequence")
            return self.expression_type(consequence) if consequence else None
        if kind == "instanceof_expression":
            return "boolean"
        if kind == "unary_expression":
            if node.operator == "!":
                return "boolean"
            operand = node.child("operand")
            return self.expression_type(operand) if operand else None
        if kind == "binary_expression":
            return self._binary_type(node)

        return None

    def invoked_method(self, invocation: SyntaxNode) -> MethodBinding | None:
        if invocation.type != "method_invocation":
            return None

        receiver = invocation.child("object")
        name_node = invocation.child("name")
        arguments = invocation.child("arguments")
        if name_node is None or (receiver is not None and receiver.type != "this"):
            return None

        arity = len(arguments.children) if arguments else 0
        candidates = [
            node
            for node in self._root.walk()
            if node.type == "method_declaration" and (name := node.child("name")) and name.text == name_node.text
        ]
        if not candidates:
            return None

        declaration = next((c for c in candidates if len(self._parameters(c)) == arity), candidates[0])
        return_type = declaration.child("type")
        if return_type is None:
            return None

        return MethodBinding(
            name=name_node.text,
            parameter_types=tuple(self._parameters(declaration)),
            return_type=return_type.text,
        )

    def variable_type(self, declarator: SyntaxNode) -> str | None:
        declaration = declarator.parent
        if declarator.type != "variable_declarator" or declaration is None:
            return None
        if declaration.type not in _DECLARATION_NODES:
            return None

        type_node = declaration.child("type")
        if type_node is None:
            return None
        return type_node.text + _dimension_suffix(declarator.child("dimensions"))

    def _parameters(self, declaration: SyntaxNode) -> list[str]:
        parameters = declaration.child("parameters")
        if parameters is None:
            return []

        types = []
        for parameter in parameters.children:
            type_node = parameter.child("type")
            if parameter.type == "formal_parameter" and type_node is not None:
                types.append(type_node.text + _dimension_suffix(parameter.child("dimensions")))
        return types

    def _identifier_type(self, identifier: SyntaxNode) -> str | None:
        name = identifier.text

        for scope in identifier.ancestors():
            if scope.type in _CALLABLE_NODES and (parameters := scope.child("parameters")):
                for parameter in parameters.children:
                    parameter_name = parameter.child("name")
                    type_node = parameter.child("type")
                    if parameter_name and type_node and parameter_name.text == name:
                        return type_node.text + _dimension_suffix(parameter.child("dimensions"))

            if scope.type == "enhanced_for_statement":
                loop_name = scope.child("name")
                type_node = scope.child("type")
                if loop_name and type_node and loop_name.text == name:
                    return type_node.text

            for member in scope.children:
                if member.type not in _DECLARATION_NODES:
                    continue
                for declarator in member.children_of("declarator"):
                    declared = declarator.child("name")
                    if declared is not None and declared.text == name:
                        return self.variable_type(declarator)

        return None

    def _enclosing_class_name(self, node: SyntaxNode) -> str | None:
        for ancestor in node.ancestors():
            if ancestor.type == "class_declaration" and (name := ancestor.child("name")):
                return name.text
        return None

    def _array_creation_type(self, creation: SyntaxNode) -> str | None:
        type_node = creation.child("type")
        if type_node is None:
            return None
        depth = sum(node.text.count("[") for node in creation.children_of("dimensions"))
        return type_node.text + "[]" * depth

    def _binary_type(self, node: SyntaxNode) -> str | None:
        operator = node.operator
        if operator in _COMPARISON_OPERATORS or operator in _LOGICAL_OPERATORS:
            return "boolean"

        left = node.child("left")
        right = node.child("right")
        left_type = self.expression_type(left) if left else None
        right_type = self.expression_type(right) if right else None

        if operator == "+" and "String" in (left_type, right_type):
            return "String"
        if left_type is None or right_type is None:
            return None
        if left_type == right_type == "boolean" and operator in ("&", "|", "^"):
            return "boolean"
        if left_type not in _NUMERIC_RANK or right_type not in _NUMERIC_RANK:
            return None
        if operator in _SHIFT_OPERATORS:
            return _promote(left_type)
        return _promote(left_type, right_type)
