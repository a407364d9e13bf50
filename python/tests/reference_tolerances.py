"""Documented reference tolerances for various test comparisons."""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

# Absolute tolerance on phases estimated with 10 bits of precision from a noiseless oracle.
# The last scale resolves the phase to within π / 2**9, well below this value.
rpe_phase_tolerance = 1e-2

# Absolute tolerance on phases estimated under symmetric readout errors with 8 bits of precision.
rpe_noisy_phase_tolerance = 5e-2

# Fraction of probabilistic runs that must land within tolerance.
# Robust phase estimation fails with small but non-zero probability.
rpe_success_rate = 0.95

# Absolute tolerance for energies recovered from exact (commuting) time evolution.
rpe_energy_tolerance = 5e-2

# Absolute tolerance parameter for comparing calculated floats in tests.
# Floats that are not calculated values should be compared using '=='.
float_comparison_absolute_tolerance = 1e-12
