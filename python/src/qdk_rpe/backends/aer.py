"""Qiskit Aer Simulator backend for QDK/RPE.

Every measurement runs a one-shot circuit on :class:`qiskit_aer.AerSimulator`
made of the register preparations followed by the operations applied since the
measured qubit was last reset. Replaying the preparation for each trial is
valid for phase estimation because oracle applications leave an eigenstate
unchanged up to a global phase and the ancilla is reset after every trial.
"""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from qiskit import ClassicalRegister, QuantumCircuit, QuantumRegister, transpile
from qiskit.quantum_info import Statevector
from qiskit_aer import AerSimulator
from qiskit_aer.noise import NoiseModel

from qdk_rpe.backends.base import QuantumBackend, Register

if TYPE_CHECKING:
    from collections.abc import Sequence

    from qdk_rpe.noise_models import QuantumErrorProfile

_LOGGER = logging.getLogger(__name__)

__all__: list[str] = ["AerSimulatorBackend"]


class AerSimulatorBackend(QuantumBackend):
    """Sampling backend executing one-shot circuits on the Qiskit Aer simulator.

    Measurements do not collapse the recorded program and :meth:`reset` discards
    every recorded operation touching the qubit, including its effect on other
    qubits. Results are therefore only meaningful when those operations leave the
    other qubits unchanged up to phase, as controlled powers of a unitary do on
    an eigenstate register.
    """

    def __init__(
        self,
        seed: int | None = None,
        noise: QuantumErrorProfile | None = None,
        method: str = "statevector",
        transpile_optimization_level: int = 0,
    ):
        """Initialize the Aer backend.

        Args:
            seed: Seed for the per-shot simulator seeds.
            noise: Optional error profile converted into an Aer noise model.
            method: Aer simulation method.
            transpile_optimization_level: Optimization level passed to :func:`qiskit.transpile`.

        """
        super().__init__()
        self._rng = np.random.default_rng(seed)
        self._noise_model = noise.to_noise_model() if noise is not None else None
        self._simulator = AerSimulator(method=method, noise_model=self._noise_model)
        self._optimization_level = transpile_optimization_level
        self._preparations: list[tuple[QuantumCircuit, tuple[int, ...]]] = []
        self._operations: list[tuple[QuantumCircuit, tuple[int, ...]]] = []

    def prepare_register(self, state: Statevector | QuantumCircuit) -> Register:
        """Allocate qubits whose preparation is replayed at the start of every shot.

        Args:
            state: State-preparation circuit, or a :class:`Statevector` that is
                prepared with ``initialize``.

        Returns:
            Register holding the new qubits.

        """
        if isinstance(state, QuantumCircuit):
            preparation = state
        else:
            vector = state if isinstance(state, Statevector) else Statevector(state)
            preparation = QuantumCircuit(vector.num_qubits, name="register_prep")
            preparation.initialize(vector.data, list(range(vector.num_qubits)))
        first = self._num_qubits
        self._num_qubits += preparation.num_qubits
        qubits = tuple(range(first, self._num_qubits))
        self._preparations.append((preparation, qubits))
        return Register(backend=self, qubits=qubits)

    def apply(self, circuit: QuantumCircuit, qubits: Sequence[int]) -> None:
        """Record ``circuit`` for replay in the next shots touching ``qubits``."""
        self._check_qubits(qubits)
        if circuit.num_qubits != len(qubits):
            raise ValueError(f"Circuit acts on {circuit.num_qubits} qubits but {len(qubits)} were given.")
        self._operations.append((circuit, tuple(qubits)))

    def measure(self, qubit: int) -> int:
        """Run one shot of the recorded program and return the outcome of ``qubit``."""
        self._check_qubits([qubit])
        program = QuantumCircuit(QuantumRegister(self._num_qubits, "q"), ClassicalRegister(1, "c"))
        for preparation, qubits in self._preparations:
            program.compose(preparation, qubits=list(qubits), inplace=True)
        for operation, qubits in self._operations:
            program.compose(operation, qubits=list(qubits), inplace=True)
        program.measure(qubit, 0)

        basis_gates = (self._noise_model or NoiseModel()).basis_gates
        compiled = transpile(program, basis_gates=basis_gates, optimization_level=self._optimization_level)
        shot_seed = int(self._rng.integers(np.iinfo(np.int32).max))
        counts = self._simulator.run(compiled, shots=1, seed_simulator=shot_seed).result().get_counts()
        _LOGGER.debug("Aer shot on qubit %d returned %s.", qubit, counts)
        return int(next(iter(counts)))

    def reset(self, qubit: int) -> None:
        """Drop the recorded operations that touch ``qubit``.

        Operations entangling ``qubit`` with other qubits are dropped as a whole.
        """
        self._check_qubits([qubit])
        self._operations = [(operation, qubits) for operation, qubits in self._operations if qubit not in qubits]

    def _allocate_qubit(self) -> int:
        self._num_qubits += 1
        return self._num_qubits - 1
