"""Test configuration and fixtures for QDK/RPE Python tests."""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

import tempfile

import numpy as np
import pytest
from qiskit.quantum_info import SparsePauliOp

from qdk_rpe.noise_models import QuantumErrorProfile, SupportedErrorTypes


@pytest.fixture
def phase_grid() -> list[float]:
    """Return the phases ``2π (k - 5) / 12`` for ``k = 0..9``."""
    return [2 * np.pi * (k - 5) / 12 for k in range(10)]


@pytest.fixture
def commuting_hamiltonian() -> SparsePauliOp:
    """Return a diagonal two-qubit Hamiltonian with a known spectrum.

    On ``|q1 q0> = |01>`` the energy is ``0.1 + 0.2 + 0.4 + 0.3 = 1.0``.
    """
    return SparsePauliOp.from_list([("II", 0.1), ("ZI", 0.2), ("IZ", -0.4), ("ZZ", -0.3)])


@pytest.fixture
def simple_error_profile() -> QuantumErrorProfile:
    """Return a small error profile with gate and readout errors."""
    return QuantumErrorProfile(
        name="simple",
        description="Light depolarizing noise with readout errors",
        errors={
            "h": {"type": SupportedErrorTypes.DEPOLARIZING_ERROR, "rate": 0.001, "num_qubits": 1},
            "cx": {"type": SupportedErrorTypes.DEPOLARIZING_ERROR, "rate": 0.005, "num_qubits": 2},
        },
        readout_error=0.02,
    )


@pytest.fixture
def temp_directory():
    """Create a temporary directory for file-based tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir
