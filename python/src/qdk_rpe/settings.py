"""Typed, lockable key/value settings shared by QDK/RPE algorithms."""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Any

_LOGGER = logging.getLogger(__name__)

__all__: list[str] = ["Settings"]

_TYPE_CHECKS: dict[str, tuple[type, ...]] = {
    "int": (int,),
    "float": (float, int),
    "string": (str,),
    "bool": (bool,),
}


class Settings:
    """Container of named, typed and documented algorithm options.

    Derived classes register their options with :meth:`_set_default`. Values can
    be changed with :meth:`set` or :meth:`update` until the settings are locked,
    which algorithms do as soon as they start running.

    Examples:
        >>> settings = Settings()
        >>> settings._set_default("num_bits", "int", -1, "The number of phase bits to estimate.")
        >>> settings.set("num_bits", 8)
        >>> settings.get("num_bits")
        8

    """

    def __init__(self) -> None:
        """Create an empty, unlocked settings container."""
        self._values: dict[str, Any] = {}
        self._types: dict[str, str] = {}
        self._descriptions: dict[str, str] = {}
        self._locked = False

    def _set_default(self, key: str, type_name: str, default: Any, description: str = "") -> None:
        """Register a setting with its type, default value and description.

        Args:
            key: Name of the setting.
            type_name: One of ``"int"``, ``"float"``, ``"string"`` or ``"bool"``.
            default: Initial value of the setting.
            description: Human-readable documentation of the setting.

        Raises:
            ValueError: If ``type_name`` is not supported.

        """
        if type_name not in _TYPE_CHECKS:
            raise ValueError(f"Unsupported setting type '{type_name}' for key '{key}'.")
        self._types[key] = type_name
        self._descriptions[key] = description
        self._values[key] = self._coerce(key, default)

    def _coerce(self, key: str, value: Any) -> Any:
        type_name = self._types[key]
        # bool is an int subclass; keep the two apart
        if type_name != "bool" and isinstance(value, bool):
            raise TypeError(f"Setting '{key}' expects a value of type {type_name}, received bool.")
        if not isinstance(value, _TYPE_CHECKS[type_name]):
            raise TypeError(f"Setting '{key}' expects a value of type {type_name}, received {type(value).__name__}.")
        if type_name == "float":
            return float(value)
        return value

    def get(self, key: str) -> Any:
        """Return the current value of ``key``.

        Raises:
            KeyError: If ``key`` is not a registered setting.

        """
        if key not in self._values:
            raise KeyError(f"Unknown setting '{key}'. Available settings: {sorted(self._values)}.")
        return self._values[key]

    def set(self, key: str, value: Any) -> None:
        """Set ``key`` to ``value``.

        Raises:
            KeyError: If ``key`` is not a registered setting.
            TypeError: If ``value`` does not match the registered type.
            RuntimeError: If the settings are locked.

        """
        if self._locked:
            raise RuntimeError(f"Settings are locked; cannot modify '{key}' after the algorithm has run.")
        if key not in self._values:
            raise KeyError(f"Unknown setting '{key}'. Available settings: {sorted(self._values)}.")
        self._values[key] = self._coerce(key, value)
        _LOGGER.debug("Setting %s updated to %r.", key, self._values[key])

    def update(self, key: str, value: Any) -> None:
        """Alias of :meth:`set` kept for symmetry with mapping-style updates."""
        self.set(key, value)

    def keys(self) -> list[str]:
        """Return the registered setting names in registration order."""
        return list(self._values)

    def to_dict(self) -> dict[str, Any]:
        """Return a copy of all setting values."""
        return dict(self._values)

    def describe(self) -> list[tuple[str, str, Any]]:
        """Return ``(key, description, value)`` tuples for every setting."""
        return [(key, self._descriptions[key], value) for key, value in self._values.items()]

    def lock(self) -> None:
        """Prevent any further modification."""
        self._locked = True

    def is_locked(self) -> bool:
        """Return whether the settings are locked."""
        return self._locked

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._values!r}, locked={self._locked})"
