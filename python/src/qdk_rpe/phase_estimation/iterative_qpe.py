"""Iterative phase estimation implementation.

This module implements the Kitaev-style iterative quantum phase estimation (IQPE)
algorithm, which measures phase bits sequentially from least-significant to
most-significant using a single ancilla qubit, a majority vote per bit and
adaptive feedback corrections. It shares the oracles and backends of robust
phase estimation and serves as a non-robust baseline.

References:
    Kitaev, A. (1995). "Quantum measurements and the Abelian Stabilizer Problem."
    arXiv:quant-ph/9511026. https://arxiv.org/abs/quant-ph/9511026

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

from qdk_rpe.data import PhaseEstimationResult
from qdk_rpe.phase_estimation.base import PhaseEstimation, PhaseEstimationAlgorithm, PhaseEstimationSettings
from qdk_rpe.utils.phase import iterative_phase_feedback_update, phase_fraction_from_feedback

if TYPE_CHECKING:
    from qdk_rpe.backends import Register
    from qdk_rpe.oracles import DiscreteOracle

_LOGGER = logging.getLogger(__name__)

__all__: list[str] = ["IterativePhaseEstimation", "IterativePhaseEstimationSettings"]


class IterativePhaseEstimationSettings(PhaseEstimationSettings):
    """Settings for iterative phase estimation."""

    def __init__(self):
        """Register the majority-vote option on top of ``num_bits``."""
        super().__init__()
        self._set_default(
            "shots_per_bit",
            "int",
            3,
            "The number of trials per measured bit entering the majority vote.",
        )


class IterativePhaseEstimation(PhaseEstimation):
    """Kitaev iterative phase estimation with a majority vote per bit."""

    algorithm = PhaseEstimationAlgorithm.ITERATIVE

    def __init__(self, num_bits: int = -1, shots_per_bit: int = 3, evolution_time: float | None = None):
        """Configure iterative phase estimation.

        Args:
            num_bits: Number of phase bits to measure. Defaults to -1; a positive value must be set before running.
            shots_per_bit: Number of trials per bit entering the majority vote.
            evolution_time: Optional time ``t`` of ``U = exp(-i H t)``, used to report energies.

        """
        super().__init__(num_bits=num_bits)
        self._settings = IterativePhaseEstimationSettings()
        self._settings.set("num_bits", num_bits)
        self._settings.set("shots_per_bit", shots_per_bit)
        self._evolution_time = evolution_time

    def _run_impl(
        self,
        oracle: DiscreteOracle,
        eigenstate: Register,
        *,
        reference_energy: float | None = None,
    ) -> PhaseEstimationResult:
        """Measure ``num_bits`` phase bits, least significant first.

        Args:
            oracle: Capability applying controlled powers of the unitary.
            eigenstate: Register prepared in an eigenstate of the unitary.
            reference_energy: Optional energy used to resolve aliases when an evolution time is set.

        Returns:
            The estimate with the measured bits ordered from most to least significant.

        """
        num_bits = self._num_bits()
        shots = self._settings.get("shots_per_bit")
        if shots < 1:
            raise ValueError(f"shots_per_bit must be a positive integer, received {shots}.")

        backend = eigenstate.backend
        phase_feedback = 0.0
        bits_lsb_first: list[int] = []
        unitary_applications = 0

        for iteration in range(num_bits):
            power = 2 ** (num_bits - iteration - 1)
            circuit = QuantumCircuit(1 + len(eigenstate), name=f"iqpe_{iteration}")
            circuit.h(0)
            oracle.apply(circuit, power, phase_feedback / power, 0, list(range(1, 1 + len(eigenstate))))
            circuit.h(0)

            ones = 0
            for _ in range(shots):
                with backend.ancilla() as control:
                    backend.apply(circuit, [control, *eigenstate.qubits])
                    ones += backend.measure(control)
            unitary_applications += shots * power

            measured_bit = 1 if 2 * ones > shots else 0
            bits_lsb_first.append(measured_bit)
            phase_feedback = iterative_phase_feedback_update(phase_feedback, measured_bit)
            _LOGGER.info(
                "Iteration %d / %d: power %d, %d of %d trials measured 1, bit %d.",
                iteration + 1,
                num_bits,
                power,
                ones,
                shots,
                measured_bit,
            )

        phase_fraction = phase_fraction_from_feedback(phase_feedback)
        return PhaseEstimationResult.from_phase(
            method=self.name(),
            phase=float(2 * np.pi * phase_fraction),
            num_bits=num_bits,
            oracle_queries=num_bits * shots,
            unitary_applications=unitary_applications,
            evolution_time=self._evolution_time,
            reference_energy=reference_energy,
            bits_msb_first=list(reversed(bits_lsb_first)),
        )
