"""QDK/RPE execution backend abstractions.

This module defines the abstract interface the estimators use to talk to a
quantum execution engine: allocate a register holding an eigenstate, apply
circuits to qubits, measure and reset single qubits. Concrete backends can be
exact simulators, sampling simulators with noise, or hardware adapters.
"""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from qiskit import QuantumCircuit

_LOGGER = logging.getLogger(__name__)

__all__: list[str] = ["QuantumBackend", "Register"]


@dataclass(frozen=True)
class Register:
    """Handle on a group of qubits owned by a backend."""

    backend: QuantumBackend
    qubits: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.qubits)


class QuantumBackend(ABC):
    """Abstract base class for execution backends.

    Qubits are identified by integer indices. Ancillas are handed out through
    :meth:`ancilla`, which always returns them reset to ``|0>`` and resets them
    again when the caller is done, whether or not an exception occurred.
    """

    def __init__(self):
        """Initialize an empty backend."""
        self._num_qubits = 0
        self._free_ancillas: list[int] = []

    @property
    def num_qubits(self) -> int:
        """Return the number of qubits allocated so far."""
        return self._num_qubits

    def name(self) -> str:
        """Return the backend name."""
        return self.__class__.__name__

    @abstractmethod
    def prepare_register(self, state: Any) -> Register:
        """Allocate new qubits and prepare them in ``state``.

        Args:
            state: State to prepare, as accepted by the concrete backend.

        Returns:
            Register holding the new qubits.

        """

    @abstractmethod
    def apply(self, circuit: QuantumCircuit, qubits: Sequence[int]) -> None:
        """Apply ``circuit`` to ``qubits`` (circuit qubit ``i`` acts on ``qubits[i]``)."""

    @abstractmethod
    def measure(self, qubit: int) -> int:
        """Measure ``qubit`` in the computational basis and return 0 or 1."""

    @abstractmethod
    def reset(self, qubit: int) -> None:
        """Return ``qubit`` to ``|0>``.

        Backends may restrict how a reset acts on qubits previously entangled with
        ``qubit``; see the concrete backend.
        """

    @abstractmethod
    def _allocate_qubit(self) -> int:
        """Add one qubit in ``|0>`` to the backend and return its index."""

    @contextmanager
    def ancilla(self) -> Iterator[int]:
        """Borrow a private ancilla in ``|0>`` for the duration of a ``with`` block.

        The ancilla is reset and returned to the pool on every exit path.
        """
        if self._free_ancillas:
            qubit = self._free_ancillas.pop()
        else:
            qubit = self._allocate_qubit()
            _LOGGER.debug("%s allocated ancilla qubit %d.", self.name(), qubit)
        try:
            yield qubit
        finally:
            self.reset(qubit)
            self._free_ancillas.append(qubit)

    def _check_qubits(self, qubits: Sequence[int]) -> None:
        for qubit in qubits:
            if not 0 <= qubit < self._num_qubits:
                raise ValueError(f"Qubit {qubit} is not allocated on {self.name()} ({self._num_qubits} qubits).")
