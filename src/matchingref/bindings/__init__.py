from matchingref.bindings.source import SourceBindings

__all__ = ["SourceBindings"]
