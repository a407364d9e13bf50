"""Tests for concurrent phase estimation runs."""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from functools import partial

import pytest

from qdk_rpe.phase_estimation import estimate_phase, estimate_phases

from .reference_tolerances import rpe_phase_tolerance, rpe_success_rate
from .test_helpers import FailingOracle, rotation_problem


def test_estimate_phases_preserves_job_order(phase_grid):
    """Concurrent runs return one estimate per job, in submission order."""
    jobs = [partial(rotation_problem, eigenphase, seed=index) for index, eigenphase in enumerate(phase_grid)]

    estimates = estimate_phases(10, jobs, max_workers=4)

    assert len(estimates) == len(phase_grid)
    successes = sum(
        abs(estimate - eigenphase) < rpe_phase_tolerance
        for estimate, eigenphase in zip(estimates, phase_grid, strict=True)
    )
    assert successes / len(phase_grid) >= rpe_success_rate


def test_estimate_phases_matches_sequential_runs():
    """Runs share no state, so a seeded job gives the same estimate concurrently or alone."""
    jobs = [partial(rotation_problem, 0.3 * index, seed=50 + index) for index in range(4)]

    concurrent = estimate_phases(6, jobs, max_workers=2)
    sequential = [estimate_phase(6, *job()) for job in jobs]

    assert concurrent == sequential


def test_estimate_phases_propagates_errors():
    """A failing job surfaces its exception."""

    def failing_job():
        _, eigenstate = rotation_problem(0.5, seed=1)
        return FailingOracle(max_power=1), eigenstate

    with pytest.raises(ValueError, match="exceeds the supported maximum"):
        estimate_phases(3, [failing_job])


def test_estimate_phases_rejects_invalid_precision():
    """Precision is validated before any job runs."""
    with pytest.raises(ValueError, match="bits_precision"):
        estimate_phases(0, [])
