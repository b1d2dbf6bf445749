"""Learner-facing hints for compiler diagnostics.

Each supported diagnostic kind has one strategy that reads the syntax
tree around the anchor node and returns every plausible fix, in a fixed
order. A strategy that cannot recover its context returns no hints.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType

from matchingref.bindings.source import SourceBindings
from matchingref.core.context import (
    argument_at,
    argument_nodes,
    argument_types,
    array_declaration,
    assigned_variable_name,
    declared_parameter_types,
    declarator_name,
    element_type_declarator,
    enclosing_invocation,
    enclosing_method_declaration,
    find_declaration_fragment,
    simple_name,
)
from matchingref.core.demo import DemoValues
from matchingref.core.ports.bindings import TypeBindings
from matchingref.models import DiagnosticKind, Hint, SyntaxNode

logger = logging.getLogger(__name__)

HintStrategy = Callable[[SyntaxNode, Sequence[str], TypeBindings, DemoValues], list[Hint]]

_PRIMITIVES = frozenset({"byte", "short", "int", "long", "float", "double", "boolean", "char"})

# The desired return type of a missing method is unknown, so use a familiar
# one like "int" instead of one like "void".
_DUMMY_RETURN_TYPE = "int"

_strategies: dict[str, HintStrategy] = {}


def _strategy(kind: DiagnosticKind) -> Callable[[HintStrategy], HintStrategy]:
    def register(func: HintStrategy) -> HintStrategy:
        _strategies[kind.value] = func
        return func

    return register


def _method_signature(name: str, parameter_types: Sequence[str]) -> str:
    return f"{name}({', '.join(parameter_types)})"


def _method_declaration(name: str, return_type: str, parameter_types: Sequence[str]) -> str:
    parameters = ", ".join(f"{type_name} param{index}" for index, type_name in enumerate(parameter_types, start=1))
    return f"{return_type} {name}({parameters})"


def _var_description(type_name: str) -> str:
    if type_name in _PRIMITIVES or type_name == "String":
        return f"{type_name}-type variable"
    return f"{type_name} object"


@_strategy(DiagnosticKind.MISSING_ARRAY_SIZE)
def _missing_array_size(
    anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings, demo: DemoValues
) -> list[Hint]:
    declarator = element_type_declarator(anchor)
    arr_name = declarator_name(declarator) if declarator is not None else None
    if arr_name is None:
        return []

    arr_type = anchor.text
    return [
        Hint(
            problem_text="You have not given the array a certain size.",
            suggestion_text="You may have forgotten to type the size of the array inside the brackets.",
            bad_code=(f"{arr_type}[] {arr_name} = new {arr_type}[];",),
            good_code=(f"{arr_type}[] {arr_name} = new {arr_type}[5];",),
        )
    ]


@_strategy(DiagnosticKind.ILLEGAL_DIMENSION)
def _illegal_dimension(
    anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings, demo: DemoValues
) -> list[Hint]:
    declaration = array_declaration(anchor)
    if declaration is None:
        return []

    arr_type, declarator = declaration
    arr_name = declarator_name(declarator)
    if arr_name is None:
        return []

    prefix = f"{arr_type}[][] {arr_name} = new {arr_type}"
    return [
        Hint(
            problem_text="In a 2D array, you have not given the innermost array a certain size.",
            suggestion_text="Specify the size of the innermost array.",
            bad_code=(f"{prefix}[][5];",),
            good_code=(f"{prefix}[5][5];", f"{prefix}[5][];"),
        )
    ]


@_strategy(DiagnosticKind.SIZE_WITH_INITIALIZER)
def _size_with_initializer(
    anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings, demo: DemoValues
) -> list[Hint]:
    declaration = array_declaration(anchor)
    if declaration is None:
        return []

    arr_type, declarator = declaration
    arr_name = declarator_name(declarator)
    if arr_name is None:
        return []

    init_list = demo.initializer_list(arr_type, 5)
    return [
        Hint(
            problem_text="You defined an array twice.",
            suggestion_text="You may have used both methods to construct an array together.",
            bad_code=(f"{arr_type}[] {arr_name} = new {arr_type}[5] {init_list};",),
            good_code=(
                f"{arr_type}[] {arr_name} = new {arr_type}[5];",
                f"{arr_type}[] {arr_name} = {init_list};",
            ),
        )
    ]


@_strategy(DiagnosticKind.UNDEFINED_METHOD)
def _undefined_method(
    anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings, demo: DemoValues
) -> list[Hint]:
    invocation = enclosing_invocation(anchor)
    name_node = invocation.child("name") if invocation is not None else None
    if invocation is None or name_node is None:
        return []

    provided_types = argument_types(invocation, bindings)
    if provided_types is None:
        return []

    provided_params = ", ".join(argument.text for argument in argument_nodes(invocation))
    method_name = name_node.text
    name_with_parens = f"{method_name}()"
    current_call = f"{method_name}({provided_params})"
    renamed_call = f"correctName({provided_params})"
    method_dec = _method_declaration(method_name, _DUMMY_RETURN_TYPE, provided_types)
    class_with_method = f"class YourClass {{\n  {method_dec} {{\n    ...\n  }}\n}}\n"
    object_call = f"{demo.declaration('YourClass', 'myObject')}\nmyObject.{current_call};"

    problem_title = (
        f"You are trying to use a function, {name_with_parens}, which Processing does not recognize. "
        '("Method" and "function" are used interchangeably here.)'
    )

    use_java_name = Hint(
        problem_text=problem_title,
        suggestion_text=(
            "If you are trying to use an existing Java function, "
            f"make sure you match the name of {name_with_parens} with the function."
        ),
        bad_code=(f"String str = {demo.value('String')};\nstr.{current_call};",),
        good_code=(f"String str = {demo.value('String')};\nstr.{renamed_call};",),
    )
    use_declaration_name = Hint(
        problem_text=problem_title,
        suggestion_text=f"You may need to change the name of {name_with_parens} to the method you created.",
        bad_code=(f"{current_call};",),
        good_code=(f"{current_call};\n{method_dec} {{\n  ...\n}}",),
    )
    call_on_object = Hint(
        problem_text=problem_title,
        suggestion_text=(
            f"You may need to create an object of a class and call the method {name_with_parens} on it."
        ),
        bad_code=(f"{class_with_method}{current_call};",),
        good_code=(f"{class_with_method}{object_call}",),
    )
    create_class_method = Hint(
        problem_text=problem_title,
        suggestion_text=f"You may need to create the method {name_with_parens} in a class.",
        bad_code=(f"class YourClass {{\n}}\n{object_call}",),
        good_code=(f"{class_with_method}{object_call}",),
    )

    return [use_java_name, use_declaration_name, call_on_object, create_class_method]


@_strategy(DiagnosticKind.PARAMETER_MISMATCH)
def _parameter_mismatch(
    anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings, demo: DemoValues
) -> list[Hint]:
    invocation = enclosing_invocation(anchor)
    if invocation is None:
        return []

    binding = bindings.invoked_method(invocation)
    provided_types = argument_types(invocation, bindings)
    if binding is None or provided_types is None:
        return []

    method_name = binding.name
    required_types = list(binding.parameter_types)
    provided_call = f"{method_name}({', '.join(a.text for a in argument_nodes(invocation))})"
    method_sig = _method_signature(method_name, required_types)
    method_dec = _method_declaration(method_name, binding.return_type, required_types)
    provided_dec = _method_declaration(method_name, binding.return_type, provided_types)
    problem_title = f"You are trying to use the method {method_sig} but with incorrect parameters."

    def _sketch(declaration: str, call: str) -> str:
        return f"{declaration} {{\n  ...\n}}\nvoid setup() {{\n  {call};\n}}\n"

    bad_code = (_sketch(method_dec, provided_call),)

    hints = [
        Hint(
            problem_text=problem_title,
            suggestion_text=f"You might need to change a parameter of {method_sig} to the expected type.",
            bad_code=bad_code,
            good_code=(_sketch(method_dec, demo.call(method_name, required_types)),),
        ),
        Hint(
            problem_text=problem_title,
            suggestion_text=(
                f"You might need to change a parameter of {method_sig} in the method declaration to the expected type."
            ),
            bad_code=bad_code,
            good_code=(_sketch(provided_dec, provided_call),),
        ),
    ]

    if len(provided_types) != len(required_types):
        hints.append(
            Hint(
                problem_text=problem_title,
                suggestion_text=(
                    f"You may need to change the number of parameters to the expected amount when calling {method_sig}."
                ),
                bad_code=bad_code,
                good_code=(_sketch(method_dec, demo.call(method_name, required_types)),),
            )
        )
        hints.append(
            Hint(
                problem_text=problem_title,
                suggestion_text=f"Change the number of parameters in the {method_sig} method declaration.",
                bad_code=bad_code,
                good_code=(_sketch(provided_dec, provided_call),),
            )
        )

    return hints


@_strategy(DiagnosticKind.MISSING_RETURN)
def _missing_return(
    anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings, demo: DemoValues
) -> list[Hint]:
    declaration = enclosing_method_declaration(anchor)
    if declaration is None:
        return []

    name_node = declaration.child("name")
    type_node = declaration.child("type")
    if name_node is None or type_node is None or type_node.text == "void":
        return []

    return_type = type_node.text
    parameter_types = declared_parameter_types(declaration)
    method_sig = _method_signature(name_node.text, parameter_types)
    method_dec = _method_declaration(name_node.text, return_type, parameter_types)
    branch_value = demo.value(return_type)
    fallback_value = demo.value(return_type)
    problem_title = f"You did not return a value of type {return_type} like the definition of method {method_sig}."

    return [
        Hint(
            problem_text=problem_title,
            suggestion_text=f"You may have forgotten the return statement for the method {method_sig}.",
            bad_code=(f"{method_dec} {{\n  ...\n}}",),
            good_code=(f"{method_dec} {{\n  ...\n  return {branch_value};\n}}",),
        ),
        Hint(
            problem_text=problem_title,
            suggestion_text=f"Make sure that every branch of a conditional statement in {method_sig} returns a value.",
            bad_code=(f"{method_dec} {{\n  if (...) {{\n    return {branch_value};\n  }}\n}}",),
            good_code=(
                f"{method_dec} {{\n  if (...) {{\n    return {branch_value};\n"
                f"  }} else {{\n    return {fallback_value};\n  }}\n}}",
                f"{method_dec} {{\n  if (...) {{\n    return {branch_value};\n  }}\n  return {fallback_value};\n}}",
            ),
        ),
    ]


@_strategy(DiagnosticKind.TYPE_MISMATCH)
def _type_mismatch(
    anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings, demo: DemoValues
) -> list[Hint]:
    provided_arg = argument_at(arguments, 0)
    required_arg = argument_at(arguments, 1)
    var_name = assigned_variable_name(anchor)
    if provided_arg is None or required_arg is None or var_name is None:
        return []

    provided_type = simple_name(provided_arg)
    required_type = simple_name(required_arg)
    problem_title = (
        f"You are trying to use the {_var_description(required_type)} {var_name} "
        f"as a {_var_description(provided_type)}."
    )
    mismatched_dec = demo.declaration(required_type, var_name, provided_type)

    def _returning(return_type: str) -> str:
        return f"{return_type} doSomething() {{\n  {demo.declaration(provided_type, var_name)}\n  return {var_name};\n}}"

    hints = [
        Hint(
            problem_text=problem_title,
            suggestion_text=f"You might need to change the variable declaration of {var_name} to type {provided_type}.",
            bad_code=(mismatched_dec,),
            good_code=(demo.declaration(provided_type, var_name),),
        ),
        Hint(
            problem_text=problem_title,
            suggestion_text=f"You might need to change the value of {var_name} to a {required_type}.",
            bad_code=(mismatched_dec,),
            good_code=(demo.declaration(required_type, var_name),),
        ),
        Hint(
            problem_text=problem_title,
            suggestion_text=f"You might need to change the method's return type to {provided_type}.",
            bad_code=(_returning(required_type),),
            good_code=(_returning(provided_type),),
        ),
    ]

    # An arithmetic expression mixing in a float widened the result.
    if provided_type == "float" and required_type == "int":
        hints.append(
            Hint(
                problem_text=problem_title,
                suggestion_text=(
                    f"You may have used an int-type variable {var_name} in an operation involving the float type."
                ),
                bad_code=(f"{demo.declaration(required_type, var_name)}\n{var_name} = {var_name} + 3.14;",),
                good_code=(f"{demo.declaration(provided_type, var_name)}\n{var_name} = {var_name} + 3.14;",),
            )
        )

    return hints


@_strategy(DiagnosticKind.UNDEFINED_TYPE)
def _undefined_type(
    anchor: SyntaxNode, arguments: Sequence[str], bindings: TypeBindings, demo: DemoValues
) -> list[Hint]:
    missing_arg = argument_at(arguments, 0)
    fragment = find_declaration_fragment(anchor)
    var_name = declarator_name(fragment) if fragment is not None else None
    if missing_arg is None or var_name is None:
        return []

    missing_type = simple_name(missing_arg)
    declaration = demo.declaration(missing_type, var_name)
    problem_title = f"You are trying to use a class, {missing_type}, which Processing does not recognize."

    return [
        Hint(
            problem_text=problem_title,
            suggestion_text=f"You may have misspelled {missing_type}. Make sure it matches the name of the class you want.",
            bad_code=(declaration,),
            good_code=(demo.declaration("CorrectName", var_name),),
        ),
        Hint(
            problem_text=problem_title,
            suggestion_text=f"If {missing_type} comes from a library, you may need to import it.",
            bad_code=(declaration,),
            good_code=(f"import libraryname.{missing_type};\n\n{declaration}",),
        ),
        Hint(
            problem_text=problem_title,
            suggestion_text=f"If {missing_type} is defined in another file of your project, you may need to import it.",
            bad_code=(declaration,),
            good_code=(f"import yourpackage.{missing_type};\n\n{declaration}",),
        ),
        Hint(
            problem_text=problem_title,
            suggestion_text=f"You may need to create the class {missing_type}.",
            bad_code=(declaration,),
            good_code=(f"class {missing_type} {{\n  ...\n}}\n\n{declaration}",),
        ),
    ]


HINT_STRATEGIES: Mapping[str, HintStrategy] = MappingProxyType(_strategies)


def synthesize_hints(
    kind: str,
    arguments: Sequence[str],
    anchor: SyntaxNode,
    bindings: TypeBindings | None = None,
    demo: DemoValues | None = None,
) -> list[Hint]:
    """Return every hint for a diagnostic, or an empty list when none apply."""
    strategy = HINT_STRATEGIES.get(str(kind))
    if strategy is None:
        logger.debug("No hint strategy for diagnostic kind %s", kind)
        return []

    hints = strategy(
        anchor,
        arguments,
        bindings if bindings is not None else SourceBindings(anchor.root),
        demo if demo is not None else DemoValues(),
    )
    if not hints:
        logger.debug("Unresolvable context for %s at %s node", kind, anchor.type)
    return hints
