from __future__ import annotations

import copy
from typing import Any

from mailcollector.protocols.variables import VariableStore


class InMemoryVariableStore(VariableStore):
    """
    A variable store that keeps its values in a dictionary.

    Values are deep-copied on the way in and on the way out, so a caller
    mutating a list it received (e.g. the captured emails) never changes
    what is stored.

    Example:
        ```python
        store = InMemoryVariableStore({"mail_system": {"default-system": "DefaultMailSystem"}})
        collector = MailCollector(store, enabled=True)
        ```
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._variables: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._variables:
            return default
        return copy.deepcopy(self._variables[key])

    def set(self, key: str, value: Any) -> None:
        self._variables[key] = copy.deepcopy(value)

    def unset(self, key: str) -> None:
        self._variables.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._variables

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(keys={sorted(self._variables)!r})"
