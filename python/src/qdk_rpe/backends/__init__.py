"""QDK/RPE execution backends."""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from qdk_rpe.backends.aer import AerSimulatorBackend
from qdk_rpe.backends.base import QuantumBackend, Register
from qdk_rpe.backends.statevector import StatevectorBackend

__all__ = ["AerSimulatorBackend", "QuantumBackend", "Register", "StatevectorBackend"]
