"""Tests for the phase estimation factory and the iterative baseline."""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from __future__ import annotations

import numpy as np
import pytest

from qdk_rpe.phase_estimation import (
    IterativePhaseEstimation,
    PhaseEstimation,
    PhaseEstimationAlgorithm,
    RobustPhaseEstimation,
)

from .reference_tolerances import float_comparison_absolute_tolerance
from .test_helpers import rotation_problem


def test_from_algorithm_defaults_to_robust() -> None:
    """No algorithm name selects robust phase estimation."""
    estimator = PhaseEstimation.from_algorithm(None, num_bits=6)
    assert isinstance(estimator, RobustPhaseEstimation)
    assert estimator.settings().get("num_bits") == 6
    assert estimator.type_name() == "phase_estimation"
    assert estimator.aliases() == ["robust"]


@pytest.mark.parametrize(
    ("algorithm", "expected_cls"),
    [
        ("robust", RobustPhaseEstimation),
        ("ITERATIVE", IterativePhaseEstimation),
        (PhaseEstimationAlgorithm.ITERATIVE, IterativePhaseEstimation),
    ],
)
def test_from_algorithm_resolves_names(algorithm, expected_cls) -> None:
    """Algorithm names are matched case-insensitively."""
    assert isinstance(PhaseEstimation.from_algorithm(algorithm), expected_cls)


def test_from_algorithm_rejects_unknown_name() -> None:
    """Unknown algorithms raise a descriptive error."""
    with pytest.raises(ValueError, match="Unrecognized phase estimation algorithm"):
        PhaseEstimation.from_algorithm("quantum_fourier")


def test_iterative_phase_estimation_exact_bits() -> None:
    """A phase representable with three bits is recovered exactly."""
    eigenphase = 2 * np.pi * 5 / 8
    oracle, eigenstate = rotation_problem(eigenphase, seed=9)
    iqpe = IterativePhaseEstimation(num_bits=3, shots_per_bit=3)

    result = iqpe.run(oracle, eigenstate)

    assert result.bits_msb_first == (1, 0, 1)
    assert result.bitstring_msb_first == "101"
    assert result.phase_fraction == pytest.approx(5 / 8, abs=float_comparison_absolute_tolerance)
    assert result.phase == pytest.approx(eigenphase)
    assert result.oracle_queries == 9
    assert result.unitary_applications == 3 * (4 + 2 + 1)
    assert result.method == "iterative"


def test_iterative_phase_estimation_reports_energy() -> None:
    """With an evolution time the phase is converted into an energy."""
    eigenphase = 2 * np.pi * 3 / 4
    oracle, eigenstate = rotation_problem(eigenphase, seed=9)

    result = IterativePhaseEstimation(num_bits=2, evolution_time=0.5).run(oracle, eigenstate)

    # 3π/2 wraps to -π/2, so E = (π/2) / 0.5
    assert result.energy == pytest.approx(np.pi)
    assert "Energy" in result.get_summary()


def test_iterative_phase_estimation_rejects_invalid_shots() -> None:
    """The majority vote needs at least one trial per bit."""
    oracle, eigenstate = rotation_problem(0.5, seed=9)
    with pytest.raises(ValueError, match="shots_per_bit"):
        IterativePhaseEstimation(num_bits=2, shots_per_bit=0).run(oracle, eigenstate)
