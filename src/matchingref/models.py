from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class DiagnosticKind(StrEnum):
    """Compiler problem identifiers the engine knows about."""

    MISSING_ARRAY_SIZE = "MustDefineEitherDimensionExpressionsOrInitializer"
    ILLEGAL_DIMENSION = "IllegalDimension"
    SIZE_WITH_INITIALIZER = "CannotDefineDimensionExpressionsWithInit"
    UNDEFINED_METHOD = "UndefinedMethod"
    PARAMETER_MISMATCH = "ParameterMismatch"
    MISSING_RETURN = "ShouldReturnValue"
    TYPE_MISMATCH = "TypeMismatch"
    UNDEFINED_TYPE = "UndefinedType"
    UNDEFINED_NAME = "UndefinedName"
    UNINITIALIZED_VARIABLE = "UninitializedLocalVariable"
    STATIC_METHOD_REQUESTED = "StaticMethodRequested"
    UNEXPECTED_TOKEN = "ParsingErrorDeleteToken"
    INSERT_TO_COMPLETE = "ParsingErrorInsertToComplete"


class Diagnostic(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str
    arguments: tuple[str, ...] = ()
    anchor_start: int
    anchor_end: int


class Hint(BaseModel):
    """One candidate fix for a diagnosed problem.

    Several hints may share ``problem_text`` while offering different
    suggestions; the code examples are fixed once the hint is built.
    """

    model_config = ConfigDict(frozen=True)

    problem_text: str
    suggestion_text: str
    bad_code: tuple[str, ...] = ()
    good_code: tuple[str, ...] = ()


class MethodBinding(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    parameter_types: tuple[str, ...] = ()
    return_type: str


class Explanation(BaseModel):
    diagnostic: Diagnostic
    hints: list[Hint] = []
    link: str | None = None


@dataclass(eq=False)
class SyntaxNode:
    """A read-only syntax tree node with a parent link.

    ``field_name`` is the name under which the parent holds this node and
    ``operator`` carries the text of an anonymous operator token.
    """

    type: str
    text: str = ""
    start_byte: int = 0
    end_byte: int = 0
    field_name: str | None = None
    operator: str | None = None
    children: list[SyntaxNode] = field(default_factory=list)
    parent: SyntaxNode | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.children:
            child.parent = self

    def append(self, child: SyntaxNode) -> None:
        child.parent = self
        self.children.append(child)

    def child(self, name: str) -> SyntaxNode | None:
        for node in self.children:
            if node.field_name == name:
                return node
        return None

    def children_of(self, name: str) -> list[SyntaxNode]:
        return [node for node in self.children if node.field_name == name]

    def ancestors(self) -> Iterator[SyntaxNode]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def ancestor(self, depth: int) -> SyntaxNode | None:
        node: SyntaxNode | None = self
        for _ in range(depth):
            if node is None:
                return None
            node = node.parent
        return node

    @property
    def root(self) -> SyntaxNode:
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def walk(self) -> Iterator[SyntaxNode]:
        yield self
        for child in self.children:
            yield from child.walk()
