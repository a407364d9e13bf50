"""Concurrent execution of independent phase estimation runs."""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from qdk_rpe.phase_estimation.robust_qpe import estimate_phase

if TYPE_CHECKING:
    from qdk_rpe.backends import Register
    from qdk_rpe.oracles import DiscreteOracle

_LOGGER = logging.getLogger(__name__)

__all__: list[str] = ["PhaseEstimationJob", "estimate_phases"]

#: Zero-argument callable building an oracle and an eigenstate on a private backend.
PhaseEstimationJob = Callable[[], "tuple[DiscreteOracle, Register]"]


def estimate_phases(
    bits_precision: int,
    jobs: Sequence[PhaseEstimationJob],
    *,
    max_workers: int | None = None,
) -> list[float]:
    """Run :func:`~qdk_rpe.phase_estimation.estimate_phase` for independent jobs concurrently.

    Each job is called inside its worker so that every run owns its backend,
    eigenstate and ancilla. Runs share no state.

    Args:
        bits_precision: Bits of precision used for every run.
        jobs: Callables returning ``(oracle, eigenstate)`` pairs.
        max_workers: Maximum number of worker threads.

    Returns:
        The phase estimates, in the order of ``jobs``.

    Raises:
        ValueError: If ``bits_precision`` is not positive.

    """
    if bits_precision < 1:
        raise ValueError(f"bits_precision must be a positive integer, received {bits_precision}.")

    def _run(job: PhaseEstimationJob) -> float:
        oracle, eigenstate = job()
        return estimate_phase(bits_precision, oracle, eigenstate)

    _LOGGER.info("Running %d phase estimation jobs with %d bits of precision.", len(jobs), bits_precision)
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [pool.submit(_run, job) for job in jobs]
        return [future.result() for future in futures]
