from typing import Protocol

from matchingref.models import MethodBinding, SyntaxNode


class TypeBindings(Protocol):
    def expression_type(self, node: SyntaxNode) -> str | None: ...

    def invoked_method(self, invocation: SyntaxNode) -> MethodBinding | None: ...

    def variable_type(self, declarator: SyntaxNode) -> str | None: ...
