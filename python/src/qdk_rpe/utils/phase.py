"""Utility functions for manipulating phases produced by phase estimation."""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

import math
from collections.abc import Iterable

import numpy as np

__all__ = [
    "energy_alias_candidates",
    "energy_from_phase",
    "iterative_phase_feedback_update",
    "local_phase_from_counts",
    "phase_fraction_from_feedback",
    "resolve_energy_aliases",
    "unwrap_phase_correction",
    "wrap_to_principal_branch",
]

_TWO_PI = 2 * np.pi


def wrap_to_principal_branch(angle: float) -> float:
    """Reduce ``angle`` modulo ``2π`` into the principal branch ``(-π, π]``.

    Both ``π`` and ``-π`` map to ``π``.

    Args:
        angle: Angle in radians.

    Returns:
        Representative of ``angle`` in ``(-π, π]``.

    """
    wrapped = float(np.pi - np.mod(np.pi - angle, _TWO_PI))
    # np.mod can round up to exactly 2π for tiny negative arguments
    if wrapped <= -np.pi:
        wrapped += _TWO_PI
    return wrapped


def local_phase_from_counts(p_zero: int, p_plus: int, n_repeats: int) -> float:
    """Estimate ``power * φ`` (mod ``2π``) from the two experiment counts.

    Experiment 0 estimates ``cos(power * φ)`` through ``p_zero`` and experiment 1
    estimates ``sin(power * φ)`` through ``p_plus``; both are centered on
    ``n_repeats / 2`` before taking the arctangent.

    Args:
        p_zero: Number of ``0`` outcomes of the cosine experiment.
        p_plus: Number of ``0`` outcomes of the sine experiment.
        n_repeats: Number of trials of each experiment.

    Returns:
        Local angle in ``[-π, π]``.

    Raises:
        ValueError: If ``n_repeats`` is not positive or a count lies outside ``[0, n_repeats]``.

    """
    if n_repeats < 1:
        raise ValueError(f"n_repeats must be a positive integer, received {n_repeats}.")
    for label, count in (("p_zero", p_zero), ("p_plus", p_plus)):
        if not 0 <= count <= n_repeats:
            raise ValueError(f"{label} must lie in [0, {n_repeats}], received {count}.")
    half = n_repeats / 2.0
    return math.atan2(p_plus - half, p_zero - half)


def unwrap_phase_correction(local_angle: float, prior_estimate: float, power: int) -> float:
    """Return the correction that merges ``local_angle`` into ``prior_estimate``.

    The already known part of the phase, ``prior_estimate * power``, is removed
    from the angle measured at scale ``power`` and the remainder is reduced to
    ``(-π, π]``. Adding ``correction / power`` to the prior estimate therefore
    never moves it by more than ``π / power``.

    Args:
        local_angle: Angle measured at scale ``power``.
        prior_estimate: Phase estimate accumulated over the coarser scales.
        power: Power of the unitary the local angle was measured with.

    Returns:
        Correction in ``(-π, π]``.

    """
    return wrap_to_principal_branch(local_angle - prior_estimate * power)


def energy_from_phase(phase: float, *, evolution_time: float) -> float:
    """Convert an eigenphase of ``U = exp(-i H t)`` into an energy.

    The eigenvalue ``exp(iφ)`` of ``U`` corresponds to ``E = -φ / t`` with ``φ``
    taken in the principal branch.

    Args:
        phase: Eigenphase ``φ`` in radians.
        evolution_time: Evolution time ``t`` used in ``U = exp(-i H t)``.

    Returns:
        Energy estimate corresponding to ``phase``.

    Raises:
        ValueError: If ``evolution_time`` is zero.

    """
    if evolution_time == 0:
        raise ValueError("evolution_time must be non-zero to convert a phase into an energy.")
    return float(-wrap_to_principal_branch(phase) / evolution_time)


def energy_alias_candidates(
    raw_energy: float,
    *,
    evolution_time: float,
    shift_range: Iterable[int] = range(-2, 3),
) -> list[float]:
    """Enumerate the energies indistinguishable from ``raw_energy`` at this evolution time.

    Args:
        raw_energy: Energy derived from the measured phase.
        evolution_time: Evolution time ``t`` used by the unitary.
        shift_range: Integer shifts (in multiples of ``2π / t``) to explore.

    Returns:
        Sorted list of alias energies, always including ``raw_energy`` itself.

    """
    period = _TWO_PI / abs(evolution_time)
    shifts = set(shift_range)
    shifts.add(0)
    return sorted(float(raw_energy + period * shift) for shift in shifts)


def resolve_energy_aliases(
    raw_energy: float,
    *,
    evolution_time: float,
    reference_energy: float,
    shift_range: Iterable[int] = range(-2, 3),
) -> float:
    """Select the alias energy closest to a known reference value.

    Args:
        raw_energy: Energy derived from the measured phase.
        evolution_time: Evolution time ``t`` used by the unitary.
        reference_energy: External reference guiding alias selection.
        shift_range: Integer shifts (in multiples of ``2π / t``) to explore.

    Returns:
        Alias energy closest to ``reference_energy``.

    """
    candidates = energy_alias_candidates(raw_energy, evolution_time=evolution_time, shift_range=shift_range)
    return min(candidates, key=lambda energy: abs(energy - reference_energy))


def iterative_phase_feedback_update(current_phase: float, measured_bit: int) -> float:
    """Update the Kitaev feedback phase after measuring one bit.

    Args:
        current_phase: Feedback phase ``Φ(k+1)`` from the previous iteration.
        measured_bit: Measured classical bit ``j_k`` (0 or 1).

    Returns:
        Updated feedback phase ``Φ(k)``.

    Raises:
        ValueError: If ``measured_bit`` is not 0 or 1.

    """
    if measured_bit not in (0, 1):
        raise ValueError(f"measured_bit must be 0 or 1, received {measured_bit}.")
    return current_phase / 2.0 + np.pi * measured_bit / 2.0


def phase_fraction_from_feedback(phase_feedback: float) -> float:
    """Convert the final feedback phase ``Φ(1)`` into the phase fraction ``φ / 2π``."""
    return float(phase_feedback / np.pi)
