"""Exact state-vector backend built on :mod:`qiskit.quantum_info`.

Gates are applied to a single :class:`~qiskit.quantum_info.Statevector` holding
every allocated qubit. All randomness comes from one explicit
:class:`numpy.random.Generator`, so runs are reproducible from a seed.
"""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from qiskit import QuantumCircuit
from qiskit.quantum_info import Statevector

from qdk_rpe.backends.base import QuantumBackend, Register

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import ArrayLike

_LOGGER = logging.getLogger(__name__)

__all__: list[str] = ["StatevectorBackend"]


class StatevectorBackend(QuantumBackend):
    """Exact simulator with optional symmetric readout error."""

    def __init__(self, seed: int | np.random.Generator | None = None, readout_error: float = 0.0):
        """Initialize the state-vector backend.

        Args:
            seed: Seed or generator driving measurement outcomes.
            readout_error: Probability that a measurement reports the flipped
                outcome. The post-measurement state always follows the true outcome.

        Raises:
            ValueError: If ``readout_error`` is outside ``[0, 0.5)``.

        """
        super().__init__()
        if not 0.0 <= readout_error < 0.5:
            raise ValueError(f"readout_error must lie in [0, 0.5), received {readout_error}.")
        self._rng = seed if isinstance(seed, np.random.Generator) else np.random.default_rng(seed)
        self._readout_error = readout_error
        self._state: Statevector | None = None

    @property
    def state(self) -> Statevector | None:
        """Return the current state of all allocated qubits."""
        return self._state

    def prepare_register(self, state: Statevector | QuantumCircuit | ArrayLike) -> Register:
        """Append qubits prepared in ``state`` and return their register.

        Args:
            state: A :class:`Statevector`, a gate-only state-preparation
                :class:`QuantumCircuit`, or normalized amplitudes.

        Returns:
            Register holding the new qubits.

        """
        vector = state if isinstance(state, Statevector) else Statevector(state)
        if not vector.is_valid():
            raise ValueError("Register state must be a normalized qubit state vector.")
        first = self._num_qubits
        self._append_state(vector)
        qubits = tuple(range(first, self._num_qubits))
        _LOGGER.debug("Prepared register on qubits %s.", qubits)
        return Register(backend=self, qubits=qubits)

    def apply(self, circuit: QuantumCircuit, qubits: Sequence[int]) -> None:
        """Evolve the state by ``circuit`` acting on ``qubits``."""
        self._check_qubits(qubits)
        if circuit.num_qubits != len(qubits):
            raise ValueError(f"Circuit acts on {circuit.num_qubits} qubits but {len(qubits)} were given.")
        self._state = self._state.evolve(circuit, qargs=list(qubits))

    def measure(self, qubit: int) -> int:
        """Sample ``qubit`` in the computational basis and collapse the state."""
        self._check_qubits([qubit])
        self._state.seed(self._rng)
        outcome, self._state = self._state.measure([qubit])
        bit = int(outcome)
        if self._readout_error and self._rng.random() < self._readout_error:
            bit ^= 1
        return bit

    def reset(self, qubit: int) -> None:
        """Reset ``qubit`` to ``|0>``."""
        self._check_qubits([qubit])
        self._state.seed(self._rng)
        self._state = self._state.reset([qubit])

    def _allocate_qubit(self) -> int:
        self._append_state(Statevector.from_label("0"))
        return self._num_qubits - 1

    def _append_state(self, vector: Statevector) -> None:
        # expand places the new subsystem on the highest qubit indices
        self._state = vector if self._state is None else self._state.expand(vector)
        self._num_qubits = self._state.num_qubits
