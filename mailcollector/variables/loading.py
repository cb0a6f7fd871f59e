from __future__ import annotations

import inspect
from typing import Any

from mailcollector._internal._module_loading import import_string
from mailcollector.exceptions import ImproperlyConfigured
from mailcollector.protocols.variables import VariableStore


def is_variable_store(value: Any) -> bool:
    if isinstance(value, VariableStore):
        return True
    if inspect.isclass(value):
        return False
    return all(callable(getattr(value, name, None)) for name in ("get", "set", "unset"))


def load_variable_store(value: VariableStore | str | None) -> VariableStore | None:
    """
    Resolve the configured variable store.

    Args:
        value: A store, a dotted path to a store, to a store class or to a
            zero-argument factory, or `None`.

    Returns:
        The store instance, or `None` when nothing was configured.

    Raises:
        ImproperlyConfigured: If the path cannot be imported or does not lead
            to an object with `get`, `set` and `unset` methods.
    """
    if value is None or is_variable_store(value):
        return value

    target = value
    if isinstance(value, str):
        try:
            target = import_string(value)
        except ImportError as exc:
            raise ImproperlyConfigured(f"Cannot import variable store '{value}': {exc}") from exc

    if not is_variable_store(target) and callable(target):
        target = target()

    if not is_variable_store(target):
        raise ImproperlyConfigured(
            f"'{value}' is not a variable store: expected an object with "
            "get(), set() and unset() methods."
        )
    return target
