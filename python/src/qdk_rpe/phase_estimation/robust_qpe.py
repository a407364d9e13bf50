"""Robust phase estimation implementation.

This module implements robust phase estimation (RPE), which refines an
eigenphase estimate scale by scale using the powers ``U**(2**k)``. At each
scale the cosine and sine of ``2**k * φ`` are estimated from repeated
single-ancilla experiments, and the resulting local angle is merged into the
running estimate by unwrapping it around the already known coarse phase. The
number of repetitions grows for the coarse scales so that an early error is
unlikely, which yields Heisenberg-limited scaling that tolerates
state-preparation and measurement errors.

References:
    Kimmel, S., Low, G. H., & Yoder, T. J. (2015). "Robust calibration of a
    universal single-qubit gate set via robust phase estimation." Phys. Rev. A 92,
    062315. https://arxiv.org/abs/1502.02677

"""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np
from qiskit import QuantumCircuit

from qdk_rpe.data import PhaseEstimationResult, RobustPhaseEstimationIteration
from qdk_rpe.phase_estimation.base import PhaseEstimation, PhaseEstimationAlgorithm
from qdk_rpe.utils.phase import local_phase_from_counts, unwrap_phase_correction

if TYPE_CHECKING:
    from collections.abc import Iterator

    from qdk_rpe.backends import Register
    from qdk_rpe.oracles import DiscreteOracle

_LOGGER = logging.getLogger(__name__)

__all__: list[str] = [
    "REPEAT_OFFSET",
    "REPEAT_SLOPE",
    "RobustPhaseEstimation",
    "estimate_phase",
    "robust_repeat_count",
    "sample_phase_counts",
]

#: Repetitions per remaining bit of precision.
REPEAT_SLOPE = 2.5
#: Constant repetition offset.
REPEAT_OFFSET = 0.5


def robust_repeat_count(bits_precision: int, exponent: int) -> int:
    """Return the number of repetitions of each experiment at ``exponent``.

    ``ceil(2.5 * (bits_precision - exponent) + 0.5)``, rounded up to the next even number.

    Args:
        bits_precision: Total number of bits of precision.
        exponent: Current exponent, the power being ``2**exponent``.

    Returns:
        Positive even repetition count.

    Raises:
        ValueError: If ``bits_precision`` is not positive or ``exponent`` is outside ``[0, bits_precision)``.

    """
    if bits_precision < 1:
        raise ValueError(f"bits_precision must be a positive integer, received {bits_precision}.")
    if not 0 <= exponent < bits_precision:
        raise ValueError(f"exponent {exponent} is outside the valid range [0, {bits_precision - 1}].")
    n_repeats = math.ceil(REPEAT_SLOPE * (bits_precision - exponent) + REPEAT_OFFSET)
    if n_repeats % 2 == 1:
        n_repeats += 1
    return n_repeats


def _trial_circuit(oracle: DiscreteOracle, num_targets: int, *, power: int, rotation: float) -> QuantumCircuit:
    circuit = QuantumCircuit(1 + num_targets, name=f"rpe_trial_{power}")
    circuit.h(0)
    oracle.apply(circuit, power, rotation, 0, list(range(1, 1 + num_targets)))
    circuit.h(0)
    return circuit


def sample_phase_counts(
    oracle: DiscreteOracle,
    eigenstate: Register,
    *,
    power: int,
    n_repeats: int,
) -> tuple[int, int]:
    """Run ``n_repeats`` rounds of the cosine and sine experiments at ``power``.

    Every trial borrows a fresh ancilla, prepares it in ``|+>``, applies the
    oracle controlled on it with phase offset ``0`` (cosine) or
    ``π / 2 / power`` (sine), and measures it in the ``X`` basis. The ancilla is
    reset after every trial, also when the oracle or the backend fails.

    Args:
        oracle: Capability applying controlled powers of the unitary.
        eigenstate: Register holding an eigenstate of the unitary.
        power: Power of the unitary.
        n_repeats: Number of trials of each experiment.

    Returns:
        ``(p_zero, p_plus)``: the number of ``0`` outcomes of the cosine and sine experiments.

    Raises:
        ValueError: If ``power`` or ``n_repeats`` is not positive.

    """
    if power < 1:
        raise ValueError(f"power must be a positive integer, received {power}.")
    if n_repeats < 1:
        raise ValueError(f"n_repeats must be a positive integer, received {n_repeats}.")

    backend = eigenstate.backend
    trials = [
        _trial_circuit(oracle, len(eigenstate), power=power, rotation=np.pi * idx_experiment / 2 / power)
        for idx_experiment in (0, 1)
    ]

    counts = [0, 0]
    for _ in range(n_repeats):
        for idx_experiment, trial in enumerate(trials):
            with backend.ancilla() as control:
                backend.apply(trial, [control, *eigenstate.qubits])
                if backend.measure(control) == 0:
                    counts[idx_experiment] += 1

    p_zero, p_plus = counts
    _LOGGER.debug("Sampled power %d with %d repeats: p_zero=%d, p_plus=%d.", power, n_repeats, p_zero, p_plus)
    return p_zero, p_plus


def _robust_iterations(
    bits_precision: int,
    oracle: DiscreteOracle,
    eigenstate: Register,
) -> Iterator[RobustPhaseEstimationIteration]:
    if bits_precision < 1:
        raise ValueError(f"bits_precision must be a positive integer, received {bits_precision}.")

    theta_est = 0.0
    for exponent in range(bits_precision):
        power = 2**exponent
        n_repeats = robust_repeat_count(bits_precision, exponent)
        p_zero, p_plus = sample_phase_counts(oracle, eigenstate, power=power, n_repeats=n_repeats)

        local_phase = local_phase_from_counts(p_zero, p_plus, n_repeats)
        correction = unwrap_phase_correction(local_phase, theta_est, power)
        theta_est += correction / power

        _LOGGER.debug(
            "RPE exponent %d/%d: local phase %.6f, correction %.6f, estimate %.8f.",
            exponent + 1,
            bits_precision,
            local_phase,
            correction,
            theta_est,
        )
        yield RobustPhaseEstimationIteration(
            exponent=exponent,
            power=power,
            n_repeats=n_repeats,
            p_zero=p_zero,
            p_plus=p_plus,
            local_phase=local_phase,
            correction=correction,
            phase_estimate=theta_est,
        )


def estimate_phase(bits_precision: int, oracle: DiscreteOracle, eigenstate: Register) -> float:
    """Estimate the eigenphase of ``eigenstate`` with robust phase estimation.

    Args:
        bits_precision: Number of scales ``2**0 .. 2**(bits_precision-1)`` to sample.
        oracle: Capability applying controlled powers of the unitary.
        eigenstate: Register prepared in an eigenstate of the unitary; not validated.

    Returns:
        The eigenphase estimate in radians. It is not wrapped into a fixed interval.

    Raises:
        ValueError: If ``bits_precision`` is not positive.

    """
    theta_est = 0.0
    for iteration in _robust_iterations(bits_precision, oracle, eigenstate):
        theta_est = iteration.phase_estimate
    return theta_est


class RobustPhaseEstimation(PhaseEstimation):
    """Robust phase estimation with exponentially growing powers and redundant sampling."""

    algorithm = PhaseEstimationAlgorithm.ROBUST

    def __init__(self, num_bits: int = -1, evolution_time: float | None = None):
        """Configure robust phase estimation.

        Args:
            num_bits: Number of bits of precision. Defaults to -1; a positive value must be set before running.
            evolution_time: Optional time ``t`` of ``U = exp(-i H t)``, used to report energies.

        """
        super().__init__(num_bits=num_bits)
        self._evolution_time = evolution_time

    def _run_impl(
        self,
        oracle: DiscreteOracle,
        eigenstate: Register,
        *,
        reference_energy: float | None = None,
    ) -> PhaseEstimationResult:
        """Run robust phase estimation and collect the per-exponent trace.

        Args:
            oracle: Capability applying controlled powers of the unitary.
            eigenstate: Register prepared in an eigenstate of the unitary.
            reference_energy: Optional energy used to resolve aliases when an evolution time is set.

        Returns:
            The estimate together with the sampling trace and query counts.

        """
        num_bits = self._num_bits()
        _LOGGER.info("Running robust phase estimation with %d bits of precision.", num_bits)

        iterations = list(_robust_iterations(num_bits, oracle, eigenstate))
        oracle_queries = sum(2 * iteration.n_repeats for iteration in iterations)
        unitary_applications = sum(2 * iteration.n_repeats * iteration.power for iteration in iterations)

        result = PhaseEstimationResult.from_phase(
            method=self.name(),
            phase=iterations[-1].phase_estimate,
            num_bits=num_bits,
            oracle_queries=oracle_queries,
            unitary_applications=unitary_applications,
            evolution_time=self._evolution_time,
            reference_energy=reference_energy,
            iterations=iterations,
        )
        _LOGGER.info(
            "Robust phase estimation finished: phase %.8f after %d oracle queries.",
            result.phase,
            oracle_queries,
        )
        return result
