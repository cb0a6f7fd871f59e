from .file import JSONFileVariableStore
from .loading import load_variable_store
from .memory import InMemoryVariableStore

__all__ = ["InMemoryVariableStore", "JSONFileVariableStore", "load_variable_store"]
