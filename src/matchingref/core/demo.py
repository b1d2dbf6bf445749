import random
import re

_INTEGER_TYPES = frozenset({"byte", "short", "int", "long"})
_FLOATING_TYPES = frozenset({"float", "double"})
_ALPHABET = "abcdefghijklmnopqrstuvxyz"
_ARRAY_TYPE = re.compile(r"(?P<element>.+?)(?P<dimensions>(?:\s*\[\s*\])+)$")
_ARRAY_SIZE = 5

# Fixed so an example never shows random text.
_STRING_VALUE = '"hello world"'


class DemoValues:
    """Synthesizes literal expressions used in example snippets.

    Values are random on purpose; pass a seeded ``random.Random`` for
    reproducible output.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def value(self, type_name: str) -> str:
        type_name = type_name.strip()

        if type_name in _INTEGER_TYPES:
            return str(self._rng.randrange(100))
        if type_name in _FLOATING_TYPES:
            return f"{self._rng.random() * 10:.2f}"
        if type_name == "boolean":
            return "true" if self._rng.random() > 0.5 else "false"
        if type_name == "char":
            return f"'{self._rng.choice(_ALPHABET)}'"
        if type_name == "String":
            return _STRING_VALUE

        array = _ARRAY_TYPE.fullmatch(type_name)
        if array is not None:
            # Only the outermost dimension needs a size.
            depth = array["dimensions"].count("[")
            return f"new {array['element'].strip()}[{_ARRAY_SIZE}]" + "[]" * (depth - 1)

        return f"new {type_name or 'Object'}()"

    def declaration(self, dec_type: str, var_name: str, val_type: str | None = None) -> str:
        return f"{dec_type} {var_name} = {self.value(val_type or dec_type)};"

    def initializer_list(self, type_name: str, size: int) -> str:
        return "{" + ", ".join(self.value(type_name) for _ in range(size)) + "}"

    def call(self, name: str, parameter_types: list[str]) -> str:
        return f"{name}({', '.join(self.value(t) for t in parameter_types)})"


def demo_value(type_name: str, rng: random.Random | None = None) -> str:
    return DemoValues(rng).value(type_name)
