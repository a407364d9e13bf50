"""QDK/RPE: robust quantum phase estimation."""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

__version__ = "1.0.0"

from qdk_rpe.backends import AerSimulatorBackend, QuantumBackend, Register, StatevectorBackend
from qdk_rpe.data import PhaseEstimationResult
from qdk_rpe.noise_models import QuantumErrorProfile
from qdk_rpe.oracles import DiscreteOracle, PhaseRotationOracle, TimeEvolutionOracle
from qdk_rpe.phase_estimation import (
    IterativePhaseEstimation,
    PhaseEstimation,
    RobustPhaseEstimation,
    estimate_phase,
    estimate_phases,
)

__all__ = [
    "AerSimulatorBackend",
    "DiscreteOracle",
    "IterativePhaseEstimation",
    "PhaseEstimation",
    "PhaseEstimationResult",
    "PhaseRotationOracle",
    "QuantumBackend",
    "QuantumErrorProfile",
    "Register",
    "RobustPhaseEstimation",
    "StatevectorBackend",
    "TimeEvolutionOracle",
    "__version__",
    "estimate_phase",
    "estimate_phases",
]
