from prism.source.memory import InMemorySource

__all__ = ["InMemorySource"]
