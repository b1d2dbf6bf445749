"""Shape matchers that recover declaration context around an anchor node.

Every matcher returns ``None`` when the tree does not have the expected
shape; callers stop there instead of guessing.
"""

from collections.abc import Sequence

from matchingref.core.ports.bindings import TypeBindings
from matchingref.models import SyntaxNode

_DECLARATION_STATEMENTS = frozenset({"field_declaration", "local_variable_declaration"})
_DIMENSION_NODES = frozenset({"dimensions_expr", "dimensions", "array_initializer"})
_ELEMENT_TYPES = frozenset(
    {
        "integral_type",
        "floating_point_type",
        "boolean_type",
        "type_identifier",
        "scoped_type_identifier",
        "generic_type",
    }
)
_ERROR = "ERROR"


def argument_at(arguments: Sequence[str], index: int) -> str | None:
    if 0 <= index < len(arguments):
        return arguments[index]
    return None


def simple_name(qualified_name: str) -> str:
    return qualified_name[qualified_name.rfind(".") + 1 :]


def declarator_name(declarator: SyntaxNode) -> str | None:
    name = declarator.child("name")
    return name.text if name is not None else None


def find_declaration_fragment(node: SyntaxNode) -> SyntaxNode | None:
    """Return the nearest enclosing variable declarator.

    A field or statement-level declaration reached first contributes its
    first declarator, since all of them share the declared type.
    """
    current: SyntaxNode | None = node
    while current is not None:
        if current.type == "variable_declarator":
            return current
        if current.type in _DECLARATION_STATEMENTS:
            declarators = current.children_of("declarator")
            return declarators[0] if declarators else None
        current = current.parent
    return None


def _error_above(anchor: SyntaxNode) -> SyntaxNode | None:
    """Return the ``ERROR`` node that is the anchor, holds it, or holds its dimension node."""
    if anchor.type == _ERROR:
        return anchor
    parent = anchor.parent
    if parent is None:
        return None
    if parent.type == _ERROR:
        return parent
    grandparent = parent.parent
    if parent.type in _DIMENSION_NODES and grandparent is not None and grandparent.type == _ERROR:
        return grandparent
    return None


def declarator_around_error(error: SyntaxNode) -> SyntaxNode | None:
    """Return the declarator a malformed initializer belongs to.

    The parser leaves the ``ERROR`` node either inside the declarator or next
    to it in the declaration; in the latter case the closest declarator before
    it owns the initializer.
    """
    parent = error.parent
    if parent is None:
        return None
    if parent.type == "variable_declarator":
        return parent
    if parent.type in _DECLARATION_STATEMENTS:
        preceding = [d for d in parent.children_of("declarator") if d.start_byte <= error.start_byte]
        return preceding[-1] if preceding else None
    return None


def element_type_declarator(anchor: SyntaxNode) -> SyntaxNode | None:
    """Match ``Type[] name = new Type[]`` anchored at the created element type."""
    parent = anchor.parent
    if parent is not None and parent.type == _ERROR and anchor.type in _ELEMENT_TYPES:
        return declarator_around_error(parent)

    creation = anchor.ancestor(1)
    declarator = anchor.ancestor(2)
    if creation is None or creation.type != "array_creation_expression" or anchor.field_name != "type":
        return None
    if declarator is None or declarator.type != "variable_declarator":
        return None
    return declarator


def array_creation_above(anchor: SyntaxNode) -> SyntaxNode | None:
    """Return the array creation holding the anchor directly or through a dimension node."""
    parent = anchor.parent
    if parent is None:
        return None
    if parent.type == "array_creation_expression":
        return parent
    grandparent = parent.parent
    if parent.type in _DIMENSION_NODES and grandparent is not None and grandparent.type == "array_creation_expression":
        return grandparent
    return None


def declarator_above_array(creation: SyntaxNode) -> SyntaxNode | None:
    parent = creation.parent
    if parent is None:
        return None
    if parent.type == "variable_declarator":
        return parent
    if parent.type == _ERROR:
        return declarator_around_error(parent)
    return None


def array_element_type(creation: SyntaxNode) -> str | None:
    type_node = creation.child("type")
    if type_node is None:
        return None
    element = type_node.child("element") if type_node.type == "array_type" else type_node
    return element.text if element is not None else None


def declared_element_type(declarator: SyntaxNode) -> str | None:
    """Element type written in the declaration, e.g. ``int`` for ``int[][] grid``."""
    declaration = declarator.parent
    if declaration is None or declaration.type not in _DECLARATION_STATEMENTS:
        return None
    type_node = declaration.child("type")
    if type_node is None:
        return None
    return type_node.text.split("[", 1)[0].strip() or None


def array_declaration(anchor: SyntaxNode) -> tuple[str, SyntaxNode] | None:
    """Element type and declarator of the array creation around the anchor.

    Besides a well-formed creation under its declarator, this matches what
    the parser makes of a malformed one: the creation wrapped in an ``ERROR``
    node, or its loose tokens collected in one.
    """
    creation = array_creation_above(anchor)
    if creation is None:
        error = _error_above(anchor)
        if error is None:
            return None
        error_parent = error.parent
        if error_parent is not None and error_parent.type == "array_creation_expression":
            creation = error_parent
        else:
            creation = next((c for c in error.children if c.type == "array_creation_expression"), None)

        if creation is None:
            declarator = declarator_around_error(error)
            if declarator is None:
                return None
            loose_type = next((c.text for c in error.children if c.type in _ELEMENT_TYPES), None)
            element_type = loose_type or declared_element_type(declarator)
            return (element_type, declarator) if element_type is not None else None

    declarator = declarator_above_array(creation)
    if declarator is None:
        return None
    element_type = array_element_type(creation) or declared_element_type(declarator)
    return (element_type, declarator) if element_type is not None else None


def enclosing_invocation(anchor: SyntaxNode) -> SyntaxNode | None:
    parent = anchor.parent
    if parent is None or parent.type != "method_invocation":
        return None
    return parent


def enclosing_method_declaration(anchor: SyntaxNode) -> SyntaxNode | None:
    parent = anchor.parent
    if parent is None or parent.type != "method_declaration":
        return None
    return parent


def nearest_method_declaration(anchor: SyntaxNode) -> SyntaxNode | None:
    return next((node for node in anchor.ancestors() if node.type == "method_declaration"), None)


def assigned_variable_name(anchor: SyntaxNode) -> str | None:
    """Name of the variable whose declaration or assignment directly holds the anchor."""
    parent = anchor.parent
    if parent is None:
        return None
    if parent.type == "variable_declarator":
        return declarator_name(parent)
    if parent.type == "assignment_expression" and anchor.field_name == "right":
        left = parent.child("left")
        return left.text if left is not None and left.type == "identifier" else None
    return None


def argument_nodes(invocation: SyntaxNode) -> list[SyntaxNode]:
    arguments = invocation.child("arguments")
    return list(arguments.children) if arguments is not None else []


def argument_types(invocation: SyntaxNode, bindings: TypeBindings) -> list[str] | None:
    types = []
    for argument in argument_nodes(invocation):
        resolved = bindings.expression_type(argument)
        if resolved is None:
            return None
        types.append(resolved)
    return types


def declared_parameter_types(declaration: SyntaxNode) -> list[str]:
    parameters = declaration.child("parameters")
    if parameters is None:
        return []
    return [
        type_node.text
        for parameter in parameters.children
        if parameter.type == "formal_parameter" and (type_node := parameter.child("type")) is not None
    ]
