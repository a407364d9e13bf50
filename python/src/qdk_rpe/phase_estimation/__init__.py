"""QDK/RPE phase estimation module."""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from qdk_rpe.utils.phase import (
    energy_from_phase,
    local_phase_from_counts,
    unwrap_phase_correction,
    wrap_to_principal_branch,
)

from .base import PhaseEstimation, PhaseEstimationAlgorithm, PhaseEstimationSettings
from .batch import estimate_phases
from .iterative_qpe import IterativePhaseEstimation, IterativePhaseEstimationSettings
from .robust_qpe import (
    REPEAT_OFFSET,
    REPEAT_SLOPE,
    RobustPhaseEstimation,
    estimate_phase,
    robust_repeat_count,
    sample_phase_counts,
)

__all__ = [
    "REPEAT_OFFSET",
    "REPEAT_SLOPE",
    "IterativePhaseEstimation",
    "IterativePhaseEstimationSettings",
    "PhaseEstimation",
    "PhaseEstimationAlgorithm",
    "PhaseEstimationSettings",
    "RobustPhaseEstimation",
    "energy_from_phase",
    "estimate_phase",
    "estimate_phases",
    "local_phase_from_counts",
    "robust_repeat_count",
    "sample_phase_counts",
    "unwrap_phase_correction",
    "wrap_to_principal_branch",
]
