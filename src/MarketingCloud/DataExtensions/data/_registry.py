# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Name to Data Extension key mapping owned by one client instance."""

from __future__ import annotations

from typing import Dict, Iterator

from ..core.errors import DataExtensionNotFoundError

DEFAULT_DATA_EXTENSION = "default"


class _DataExtensionRegistry:
    """Registered Data Extensions, keyed by the caller's reference name."""

    def __init__(self) -> None:
        self._keys: Dict[str, str] = {}

    def add(self, name: str, key: str) -> "_DataExtensionRegistry":
        """Register ``name`` for ``key``; re-adding a name replaces its key."""
        self._keys[name] = key
        return self

    def remove(self, name: str) -> "_DataExtensionRegistry":
        self._keys.pop(name, None)
        return self

    def resolve(self, name: str = DEFAULT_DATA_EXTENSION) -> str:
        """
        Return the Data Extension key registered under ``name``.

        :raises DataExtensionNotFoundError: If ``name`` has not been registered.
        """
        key = self._keys.get(name)
        if not key:
            raise DataExtensionNotFoundError(name)
        return key

    def as_dict(self) -> Dict[str, str]:
        return dict(self._keys)

    def __contains__(self, name: object) -> bool:
        return name in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._keys))

    def __len__(self) -> int:
        return len(self._keys)
