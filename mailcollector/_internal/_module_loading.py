from importlib import import_module
from typing import Any


def import_string(dotted_path: str) -> Any:
    """
    Import a dotted module path and return the attribute designated by the
    last name in the path. `package.module:attribute` is accepted as well.
    Raise ImportError if the import failed.
    """
    separator = ":" if ":" in dotted_path else "."
    try:
        module_path, attribute = dotted_path.rsplit(separator, 1)
    except ValueError as err:
        raise ImportError(f"{dotted_path} doesn't look like a module path") from err

    module = import_module(module_path)

    try:
        return getattr(module, attribute)
    except AttributeError as err:
        raise ImportError(f'Module "{module_path}" does not define a "{attribute}" attribute') from err
