"""Java sources and anchors shared by the integration tests."""

import pytest
from snippets import Snippet


@pytest.fixture
def undefined_method() -> Snippet:
    return Snippet('class Sketch {\n  void setup() {\n    foo(1, "a");\n  }\n}\n', "foo")


@pytest.fixture
def parameter_mismatch() -> Snippet:
    source = (
        "class Sketch {\n"
        "  int add(int a, int b) {\n"
        "    return a + b;\n"
        "  }\n"
        "  void setup() {\n"
        "    add(1.5, 2, 3);\n"
        "  }\n"
        "}\n"
    )
    return Snippet(source, "add", occurrence=2)


@pytest.fixture
def missing_return() -> Snippet:
    source = "class Sketch {\n  int total(int a, float b) {\n    int sum = a;\n  }\n}\n"
    return Snippet(source, "total")


@pytest.fixture
def type_mismatch() -> Snippet:
    return Snippet('class Sketch {\n  void setup() {\n    String s = "héllo";\n    int x = 3.5;\n  }\n}\n', "3.5")


@pytest.fixture
def undefined_type() -> Snippet:
    return Snippet("class Sketch {\n  Zorp z = new Zorp();\n}\n", "Zorp")


def _in_setup(statement: str) -> str:
    return f"class Sketch {{\n  void setup() {{\n    {statement}\n  }}\n}}\n"


@pytest.fixture
def missing_array_size() -> Snippet:
    return Snippet(_in_setup("int[] nums = new int[];"), "int", occurrence=2)


@pytest.fixture
def illegal_dimension() -> Snippet:
    return Snippet(_in_setup("int[][] grid = new int[][5];"), "[5]")


@pytest.fixture
def size_with_initializer() -> Snippet:
    return Snippet(_in_setup("int[] nums = new int[5] {1, 2};"), "[5]")
