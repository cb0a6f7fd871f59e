from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class VariableStore(ABC):
    """
    Abstract Base Class (ABC) defining the interface for variable stores.

    A variable store is the host system's persistent key-value configuration.
    The collector only ever touches two keys in it: the mail system selector
    and the capture buffer.
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """
        Retrieves the value stored under the given key.

        Args:
            key (str): The name of the variable.
            default (Any): Returned when the variable is not set.

        Returns:
            Any: The stored value, or `default` if the key is absent.

        Raises:
            NotImplementedError: If the concrete store does not implement this method.
        """
        raise NotImplementedError("Variable store must implement get method.")

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """
        Stores a value under the specified key, replacing any previous value.

        Args:
            key (str): The name of the variable.
            value (Any): The value to store.

        Raises:
            NotImplementedError: If the concrete store does not implement this method.
        """
        raise NotImplementedError("Variable store must implement set method.")

    @abstractmethod
    def unset(self, key: str) -> None:
        """
        Removes the variable stored under the given key.

        Removing a key that does not exist must not raise.

        Args:
            key (str): The name of the variable.

        Raises:
            NotImplementedError: If the concrete store does not implement this method.
        """
        raise NotImplementedError("Variable store must implement unset method.")
