"""Reference catalog paths for compiler diagnostics.

A path names a catalog page and fills in its template through query
parameters. It is relative; callers resolve it against their own base URL.
"""

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType
from urllib.parse import urlencode

from matchingref.bindings.source import SourceBindings
from matchingref.core.context import (
    argument_at,
    argument_nodes,
    argument_types,
    array_declaration,
    assigned_variable_name,
    declared_parameter_types,
    declarator_name,
    enclosing_invocation,
    enclosing_method_declaration,
    find_declaration_fragment,
    nearest_method_declaration,
    simple_name,
)
from matchingref.core.inference import closest_expression_type
from matchingref.core.ports.bindings import TypeBindings
from matchingref.models import DiagnosticKind, SyntaxNode

logger = logging.getLogger(__name__)

LinkStrategy = Callable[[SyntaxNode, Sequence[str], TypeBindings], str | None]

EMBED_PARAMS = "&embed=true"
_LIST_DELIMITER = ","
_TYPE_TOKEN = re.compile(r"[\w$]+")
_QUALIFIED_NAMES = frozenset({"scoped_identifier", "field_access"})
_NON_SUFFIXED_EXPRESSIONS = frozenset({"method_invocation", "array_access", "field_access"})

_strategies: dict[str, LinkStrategy] = {}


def _strategy(kind: DiagnosticKind) -> Callable[[LinkStrategy], LinkStrategy]:
    def register(func: LinkStrategy) -> LinkStrategy:
        _strategies[kind.value] = func
        return func

    return register


def _page(name: str, **params: str) -> str:
    return f"{name}?{urlencode(params)}"


def _joined(values: Sequence[str]) -> str:
    return _LIST_DELIMITER.join(values)


def _is_expression(node: SyntaxNode) -> bool:
    return node.type.endswith("_expression") or node.type in _NON_SUFFIXED_EXPRESSIONS


def _declared_name(anchor: SyntaxNode) -> str | None:
    fragment = find_declaration_fragment(anchor)
    return declarator_name(fragment) if fragment is not None else None


def _array_page(page: str, anchor: SyntaxNode) -> str | None:
    declaration = array_declaration(anchor)
    if declaration is None:
        return None
    arr_type, declarator = declaration
    arr_name = declarator_name(declarator)
    if arr_name is None:
        return None
    return _page(page, typename=simple_name(arr_type), arrname=arr_name)


@_strategy(DiagnosticKind.MISSING_ARRAY_SIZE)
def _missing_array_size(anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings) -> str | None:
    arr_name = _declared_name(anchor)
    if arr_name is None:
        return None
    return _page("incorrectdimensionexpression1", typename=simple_name(anchor.text), arrname=arr_name)


@_strategy(DiagnosticKind.ILLEGAL_DIMENSION)
def _illegal_dimension(anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings) -> str | None:
    return _array_page("incorrectdimensionexpression2", anchor)


@_strategy(DiagnosticKind.SIZE_WITH_INITIALIZER)
def _size_with_initializer(anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings) -> str | None:
    return _array_page("incorrectdimensionexpression3", anchor)


@_strategy(DiagnosticKind.UNDEFINED_METHOD)
def _undefined_method(anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings) -> str | None:
    invocation = enclosing_invocation(anchor)
    name_node = invocation.child("name") if invocation is not None else None
    if invocation is None or name_node is None:
        return None

    receiver = invocation.child("object")
    receiver_type = argument_at(arguments, 0)
    if receiver is not None and receiver.type == "identifier" and receiver_type is not None:
        return _page(
            "methodcallonwrongtype",
            methodname=name_node.text,
            typename=simple_name(receiver_type),
            varname=receiver.text,
        )

    provided_types = argument_types(invocation, bindings)
    if provided_types is None:
        return None

    return _page(
        "methodnotfound",
        methodname=name_node.text,
        correctmethodname="correctName",
        typename=simple_name(closest_expression_type(invocation, bindings)),
        providedparams=_joined([argument.text for argument in argument_nodes(invocation)]),
        providedtypes=_joined([simple_name(t) for t in provided_types]),
    )


@_strategy(DiagnosticKind.PARAMETER_MISMATCH)
def _parameter_mismatch(anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings) -> str | None:
    invocation = enclosing_invocation(anchor)
    if invocation is None:
        return None

    binding = bindings.invoked_method(invocation)
    provided_types = argument_types(invocation, bindings)
    if binding is None or provided_types is None:
        return None

    return _page(
        "parametermismatch",
        methodname=binding.name,
        methodtypename=binding.return_type,
        providedtypes=_joined([simple_name(t) for t in provided_types]),
        requiredtypes=_joined([simple_name(t) for t in binding.parameter_types]),
    )


@_strategy(DiagnosticKind.MISSING_RETURN)
def _missing_return(anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings) -> str | None:
    declaration = enclosing_method_declaration(anchor)
    name_node = declaration.child("name") if declaration is not None else None
    type_node = declaration.child("type") if declaration is not None else None
    if declaration is None or name_node is None or type_node is None:
        return None

    return _page(
        "returnmissing",
        methodname=name_node.text,
        typename=simple_name(type_node.text),
        requiredtypes=_joined([simple_name(t) for t in declared_parameter_types(declaration)]),
    )


@_strategy(DiagnosticKind.TYPE_MISMATCH)
def _type_mismatch(anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings) -> str | None:
    provided_type = argument_at(arguments, 0)
    required_type = argument_at(arguments, 1)
    var_name = assigned_variable_name(anchor)
    if provided_type is None or required_type is None or var_name is None:
        return None

    return _page(
        "typemismatch",
        typeonename=simple_name(provided_type),
        typetwoname=simple_name(required_type),
        varname=var_name,
    )


@_strategy(DiagnosticKind.UNDEFINED_TYPE)
def _undefined_type(anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings) -> str | None:
    missing_type = argument_at(arguments, 0)
    # All variables in the statement share the type, so the first one serves as the example.
    var_name = _declared_name(anchor)
    if missing_type is None or var_name is None:
        return None

    return _page(
        "typenotfound",
        classname=simple_name(missing_type),
        correctclassname="CorrectName",
        varname=var_name,
    )


@_strategy(DiagnosticKind.UNDEFINED_NAME)
def _undefined_name(anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings) -> str | None:
    var_name = argument_at(arguments, 0)
    if var_name is None:
        return None

    var_type = closest_expression_type(anchor, bindings, var_name)
    return _page("variablenotfound", classname=simple_name(var_type), varname=var_name)


@_strategy(DiagnosticKind.UNINITIALIZED_VARIABLE)
def _uninitialized_variable(anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings) -> str | None:
    var_name = argument_at(arguments, 0)
    parent = anchor.parent
    if var_name is None or parent is None:
        return None

    if _is_expression(parent):
        expression: SyntaxNode | None = parent
    elif parent.type == "expression_statement" and parent.children:
        expression = parent.children[0]
    else:
        expression = None

    type_name = bindings.expression_type(expression) if expression is not None else None
    if type_name is None:
        return None
    return _page("variablenotinit", varname=var_name, typename=simple_name(type_name))


@_strategy(DiagnosticKind.STATIC_METHOD_REQUESTED)
def _static_method_requested(anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings) -> str | None:
    file_name = argument_at(arguments, 0)
    non_static_method = argument_at(arguments, 1)
    declaration = nearest_method_declaration(anchor)
    static_name = declaration.child("name") if declaration is not None else None
    if file_name is None or non_static_method is None or static_name is None:
        return None

    return _page(
        "nonstaticfromstatic",
        methodname=non_static_method,
        staticmethodname=static_name.text,
        filename=file_name,
    )


@_strategy(DiagnosticKind.UNEXPECTED_TOKEN)
def _unexpected_token(anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings) -> str | None:
    token = argument_at(arguments, 0)
    if token is None or not _TYPE_TOKEN.fullmatch(token):
        return None
    return _page("unexpectedtoken", typename=simple_name(token))


@_strategy(DiagnosticKind.INSERT_TO_COMPLETE)
def _insert_to_complete(anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings) -> str | None:
    if "VariableDeclarators" not in arguments:
        return None

    parent = anchor.parent
    method_name = parent.text if parent is not None and parent.type in _QUALIFIED_NAMES else anchor.text
    return _page("syntaxerrorvariabledeclarators", methodonename=method_name)


LINK_STRATEGIES: Mapping[str, LinkStrategy] = MappingProxyType(_strategies)


class ReferenceLinkAssembler:
    """Assembles reference catalog paths.

    In embedded mode every path carries ``embed=true`` so the catalog renders
    without page chrome.
    """

    def __init__(self, embedded: bool = False) -> None:
        self._global_params = EMBED_PARAMS if embedded else ""

    def assemble(
        self,
        kind: str,
        arguments: Sequence[str],
        anchor: SyntaxNode,
        bindings: TypeBindings | None = None,
    ) -> str | None:
        strategy = LINK_STRATEGIES.get(str(kind))
        if strategy is None:
            logger.debug("No link strategy for diagnostic kind %s", kind)
            return None

        path = strategy(anchor, arguments, bindings if bindings is not None else SourceBindings(anchor.root))
        if path is None:
            logger.debug("Unresolvable link context for %s at %s node", kind, anchor.type)
            return None
        return path + self._global_params


def synthesize_reference_link(
    kind: str,
    arguments: Sequence[str],
    anchor: SyntaxNode,
    bindings: TypeBindings | None = None,
    embedded: bool = False,
) -> str | None:
    return ReferenceLinkAssembler(embedded).assemble(kind, arguments, anchor, bindings)
