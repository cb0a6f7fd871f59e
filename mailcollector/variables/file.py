from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any

from mailcollector.protocols.variables import VariableStore


class JSONFileVariableStore(VariableStore):
    """
    A variable store backed by a single JSON document on disk.

    This store is useful when the host system under test runs in a
    **separate process** (for instance a development server driven by a
    browser) and both sides need to see the same variables.

    The file is re-read on every access and rewritten in full on every
    change, through a temporary file that atomically replaces the original.
    """

    def __init__(self, path: str | os.PathLike[str], create: bool = True) -> None:
        """
        Initialize the file store.

        Args:
            path: Location of the JSON document.
            create: Whether to create missing parent directories on first write.
        """
        self.path = Path(path)
        self.create = create

    def _read(self) -> dict[str, Any]:
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        if not content.strip():
            return {}
        return json.loads(content)

    def _write(self, variables: dict[str, Any]) -> None:
        if self.create:
            self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as file:
                json.dump(variables, file, indent=2, sort_keys=True)
            if self.path.exists():
                # mkstemp always creates the file with mode 0600.
                os.chmod(tmp_name, stat.S_IMODE(self.path.stat().st_mode))
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        variables = self._read()
        variables[key] = value
        self._write(variables)

    def unset(self, key: str) -> None:
        variables = self._read()
        if key not in variables:
            return
        del variables[key]
        self._write(variables)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(path={str(self.path)!r})"
