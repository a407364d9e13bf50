"""QDK/RPE data classes."""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from qdk_rpe.data.rpe_result import PhaseEstimationResult, RobustPhaseEstimationIteration

__all__ = ["PhaseEstimationResult", "RobustPhaseEstimationIteration"]
