"""Discrete oracles applying controlled powers of a unitary.

An oracle is the only access the estimators have to the unitary ``U``. It
appends ``Controlled(U**power)`` to a Qiskit circuit together with a classical
phase offset on the control qubit, so that the ``|1>`` branch of the control
picks up ``exp(i * power * (φ - phase_offset))`` when the target holds an
eigenstate with eigenphase ``φ``.
"""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Sequence

    from qiskit import QuantumCircuit
    from qiskit.circuit import Qubit
    from qiskit.quantum_info import SparsePauliOp

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "DiscreteOracle",
    "PauliRotationTerm",
    "PhaseRotationOracle",
    "TimeEvolutionOracle",
    "pauli_rotation_terms",
]


@runtime_checkable
class DiscreteOracle(Protocol):
    """Capability applying ``Controlled(U**power)`` with a classical phase offset."""

    def apply(
        self,
        circuit: QuantumCircuit,
        power: int,
        phase_offset: float,
        control: Qubit | int,
        target: Sequence[Qubit | int],
    ) -> None:
        """Append the controlled power of the unitary to ``circuit``.

        Args:
            circuit: Circuit receiving the operation.
            power: Positive integer power of ``U``.
            phase_offset: Offset subtracted from the eigenphase before the
                multiplication by ``power``.
            control: Control qubit.
            target: Qubits holding the eigenstate register.

        """


def _check_power(power: int) -> None:
    if power < 1:
        raise ValueError(f"power must be a positive integer, received {power}.")


@dataclass(frozen=True)
class PhaseRotationOracle:
    """Single-qubit oracle ``U = P(φ)`` whose eigenstate ``|1>`` has eigenvalue ``exp(iφ)``."""

    eigenphase: float

    num_qubits = 1

    def apply(
        self,
        circuit: QuantumCircuit,
        power: int,
        phase_offset: float,
        control: Qubit | int,
        target: Sequence[Qubit | int],
    ) -> None:
        """Append ``Controlled(P(φ)**power)`` and the control phase offset."""
        _check_power(power)
        if len(target) != self.num_qubits:
            raise ValueError(f"PhaseRotationOracle acts on one qubit, received {len(target)} target qubits.")
        circuit.cp(self.eigenphase * power, control, target[0])
        if phase_offset:
            circuit.p(-phase_offset * power, control)


@dataclass(frozen=True)
class PauliRotationTerm:
    """Pauli string, as ``qubit -> axis``, with its real coefficient."""

    axes: dict[int, str]
    coefficient: float


def pauli_rotation_terms(hamiltonian: SparsePauliOp, *, atol: float = 1e-12) -> list[PauliRotationTerm]:
    """Split a Hermitian :class:`~qiskit.quantum_info.SparsePauliOp` into rotation terms.

    Args:
        hamiltonian: Operator to decompose.
        atol: Tolerance used to drop negligible terms and to detect imaginary coefficients.

    Returns:
        One :class:`PauliRotationTerm` per retained term, identity terms included.

    Raises:
        ValueError: If a coefficient has an imaginary part larger than ``atol``.

    """
    terms: list[PauliRotationTerm] = []
    for pauli, coeff in zip(hamiltonian.paulis, hamiltonian.coeffs, strict=True):
        if abs(coeff) < atol:
            continue
        label = pauli.to_label()
        if abs(coeff.imag) > atol:
            raise ValueError(f"Hamiltonian coefficients must be real; term {label} has coefficient {coeff}.")
        # Qiskit labels are little-endian: the last character acts on qubit 0
        axes = {index: axis for index, axis in enumerate(reversed(label)) if axis != "I"}
        terms.append(PauliRotationTerm(axes=axes, coefficient=float(coeff.real)))
    return terms


def _change_basis(circuit: QuantumCircuit, axes: dict[int, str], qubits: list, *, inverse: bool) -> None:
    for index, qubit in zip(axes, qubits, strict=True):
        axis = axes[index]
        if axis == "X":
            circuit.h(qubit)
        elif axis == "Y" and not inverse:
            circuit.sdg(qubit)
            circuit.h(qubit)
        elif axis == "Y":
            circuit.h(qubit)
            circuit.s(qubit)


def _append_controlled_rotation(
    circuit: QuantumCircuit,
    control: Qubit | int,
    target: Sequence[Qubit | int],
    term: PauliRotationTerm,
    angle: float,
) -> None:
    """Append ``Controlled(exp(-i * angle * P))`` for the Pauli string of ``term``."""
    if not term.axes:
        circuit.p(-angle, control)
        return

    indices = sorted(term.axes)
    axes = {index: term.axes[index] for index in indices}
    qubits = [target[index] for index in indices]
    parity = qubits[-1]

    _change_basis(circuit, axes, qubits, inverse=False)
    for qubit in qubits[:-1]:
        circuit.cx(qubit, parity)
    circuit.crz(2 * angle, control, parity)
    for qubit in reversed(qubits[:-1]):
        circuit.cx(qubit, parity)
    _change_basis(circuit, axes, qubits, inverse=True)


@dataclass(frozen=True)
class TimeEvolutionOracle:
    """Oracle for ``U = exp(-i H t)`` built from controlled Pauli rotations.

    Each application of ``U`` is a product formula with ``trotter_steps`` steps,
    exact when the Hamiltonian terms commute. An eigenstate with energy ``E``
    carries the eigenphase ``φ = -E t`` (mod ``2π``).
    """

    hamiltonian: SparsePauliOp
    evolution_time: float
    trotter_steps: int = 1
    terms: tuple[PauliRotationTerm, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.trotter_steps < 1:
            raise ValueError(f"trotter_steps must be a positive integer, received {self.trotter_steps}.")
        object.__setattr__(self, "terms", tuple(pauli_rotation_terms(self.hamiltonian)))
        _LOGGER.debug(
            "Initialized %s with %d rotation terms, evolution time %.6f and %d Trotter steps.",
            self.__class__.__name__,
            len(self.terms),
            self.evolution_time,
            self.trotter_steps,
        )

    @property
    def num_qubits(self) -> int:
        """Return the number of qubits the Hamiltonian acts on."""
        return self.hamiltonian.num_qubits

    def apply(
        self,
        circuit: QuantumCircuit,
        power: int,
        phase_offset: float,
        control: Qubit | int,
        target: Sequence[Qubit | int],
    ) -> None:
        """Append ``Controlled(exp(-i H t)**power)`` and the control phase offset."""
        _check_power(power)
        if len(target) != self.num_qubits:
            raise ValueError(
                f"Hamiltonian acts on {self.num_qubits} qubits, received {len(target)} target qubits.",
            )
        step_time = self.evolution_time / self.trotter_steps
        for _ in range(power * self.trotter_steps):
            for term in self.terms:
                angle = step_time * term.coefficient
                if np.isclose(angle, 0.0):
                    continue
                _append_controlled_rotation(circuit, control, target, term, angle)
        if phase_offset:
            circuit.p(-phase_offset * power, control)
