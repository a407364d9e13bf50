"""Shared helpers for QDK/RPE tests."""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from qiskit import QuantumCircuit

from qdk_rpe.backends import QuantumBackend, Register
from qdk_rpe.backends.statevector import StatevectorBackend
from qdk_rpe.oracles import PhaseRotationOracle
from qdk_rpe.utils.phase import wrap_to_principal_branch


def phase_distance(estimate: float, target: float) -> float:
    """Return the distance between two phases on the circle."""
    return abs(wrap_to_principal_branch(estimate - target))


def rotation_problem(eigenphase: float, *, seed: int | None = None, readout_error: float = 0.0):
    """Return a pure-rotation oracle and its ``|1>`` eigenstate on a fresh state-vector backend."""
    backend = StatevectorBackend(seed=seed, readout_error=readout_error)
    eigenstate = backend.prepare_register(QuantumCircuit(1))
    circuit = QuantumCircuit(1)
    circuit.x(0)
    backend.apply(circuit, eigenstate.qubits)
    return PhaseRotationOracle(eigenphase), eigenstate


@dataclass(frozen=True)
class OffsetFlipOracle:
    """Deterministic oracle: identity without phase offset, ``Z`` on the control otherwise.

    Between the two Hadamards of a trial, the cosine experiment leaves the
    ancilla in ``|0>`` and the sine experiment flips it to ``|1>``.
    """

    def apply(self, circuit, power, phase_offset, control, target) -> None:
        if phase_offset:
            circuit.z(control)


@dataclass(frozen=True)
class FailingOracle:
    """Oracle refusing every power above ``max_power``."""

    max_power: int

    def apply(self, circuit, power, phase_offset, control, target) -> None:
        if power > self.max_power:
            raise ValueError(f"power {power} exceeds the supported maximum {self.max_power}.")


class ScriptedBackend(QuantumBackend):
    """Backend replaying scripted measurement outcomes and recording every call."""

    def __init__(self, outcomes: Iterable[int], *, fail_on_apply: int | None = None):
        super().__init__()
        self._outcomes = iter(outcomes)
        self._fail_on_apply = fail_on_apply
        self.applied: list[tuple[QuantumCircuit, tuple[int, ...]]] = []
        self.measured: list[int] = []
        self.resets: list[int] = []

    def prepare_register(self, state) -> Register:
        first = self._num_qubits
        self._num_qubits += int(state)
        return Register(backend=self, qubits=tuple(range(first, self._num_qubits)))

    def apply(self, circuit: QuantumCircuit, qubits: Sequence[int]) -> None:
        self._check_qubits(qubits)
        if self._fail_on_apply is not None and len(self.applied) == self._fail_on_apply:
            raise RuntimeError("scripted backend failure")
        self.applied.append((circuit, tuple(qubits)))

    def measure(self, qubit: int) -> int:
        self.measured.append(qubit)
        return next(self._outcomes)

    def reset(self, qubit: int) -> None:
        self.resets.append(qubit)

    def _allocate_qubit(self) -> int:
        self._num_qubits += 1
        return self._num_qubits - 1
