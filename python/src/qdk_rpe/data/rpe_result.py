"""QDK/RPE phase estimation results module."""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

import json
from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import h5py
import numpy as np

from qdk_rpe.utils.phase import energy_alias_candidates, energy_from_phase, resolve_energy_aliases

__all__: list[str] = ["PhaseEstimationResult", "RobustPhaseEstimationIteration"]

_ITERATION_FIELDS = (
    "exponent",
    "power",
    "n_repeats",
    "p_zero",
    "p_plus",
    "local_phase",
    "correction",
    "phase_estimate",
)


@dataclass(frozen=True)
class RobustPhaseEstimationIteration:
    """Record of one exponent of robust phase estimation."""

    exponent: int
    power: int
    n_repeats: int
    p_zero: int
    p_plus: int
    local_phase: float
    correction: float
    phase_estimate: float


@dataclass(frozen=True)
class PhaseEstimationResult:
    """Structured output of a phase estimation run."""

    _data_type_name = "phase_estimation_result"
    _serialization_version = "0.1.0"

    method: str
    num_bits: int
    phase: float
    canonical_phase: float
    phase_fraction: float
    oracle_queries: int
    unitary_applications: int
    evolution_time: float | None = None
    energy: float | None = None
    branching: tuple[float, ...] | None = None
    resolved_energy: float | None = None
    bits_msb_first: tuple[int, ...] | None = None
    iterations: tuple[RobustPhaseEstimationIteration, ...] = ()
    metadata: dict[str, object] | None = None

    @classmethod
    def from_phase(
        cls,
        *,
        method: str,
        phase: float,
        num_bits: int,
        oracle_queries: int,
        unitary_applications: int,
        evolution_time: float | None = None,
        reference_energy: float | None = None,
        branch_shifts: Iterable[int] = range(-2, 3),
        bits_msb_first: Sequence[int] | None = None,
        iterations: Sequence[RobustPhaseEstimationIteration] = (),
        metadata: dict[str, object] | None = None,
    ) -> "PhaseEstimationResult":
        """Construct a result from an estimated eigenphase.

        Args:
            method: Phase estimation algorithm label.
            phase: Estimated eigenphase in radians, as produced by the estimator.
            num_bits: Number of bits of precision requested.
            oracle_queries: Number of oracle applications (one per trial).
            unitary_applications: Number of applications of ``U`` summed over all trials.
            evolution_time: Evolution time ``t`` of ``U = exp(-i H t)``, when the
                phase should be converted into an energy.
            reference_energy: Optional value used to select among alias energies.
            branch_shifts: Integer multiples of ``2π / t`` examined for aliases.
            bits_msb_first: Measured bits, for bitwise estimators.
            iterations: Per-exponent trace of a robust phase estimation run.
            metadata: Optional caller-defined context.

        Returns:
            Populated :class:`PhaseEstimationResult`.

        """
        method_label = str(method.value) if hasattr(method, "value") else str(method)
        canonical_phase = float(np.mod(phase, 2 * np.pi))

        energy = branching = resolved = None
        if evolution_time is not None:
            energy = energy_from_phase(phase, evolution_time=evolution_time)
            branching = tuple(
                energy_alias_candidates(energy, evolution_time=evolution_time, shift_range=branch_shifts)
            )
            if reference_energy is not None:
                resolved = resolve_energy_aliases(
                    energy,
                    evolution_time=evolution_time,
                    reference_energy=reference_energy,
                    shift_range=branch_shifts,
                )

        return cls(
            method=method_label,
            num_bits=int(num_bits),
            phase=float(phase),
            canonical_phase=canonical_phase,
            phase_fraction=canonical_phase / (2 * np.pi),
            oracle_queries=int(oracle_queries),
            unitary_applications=int(unitary_applications),
            evolution_time=None if evolution_time is None else float(evolution_time),
            energy=energy,
            branching=branching,
            resolved_energy=resolved,
            bits_msb_first=None if bits_msb_first is None else tuple(int(bit) for bit in bits_msb_first),
            iterations=tuple(iterations),
            metadata=None if metadata is None else dict(metadata),
        )

    @property
    def bitstring_msb_first(self) -> str | None:
        """Return the measured bits as a string, when available."""
        if self.bits_msb_first is None:
            return None
        return "".join(str(bit) for bit in self.bits_msb_first)

    def get_summary(self) -> str:
        """Get a human-readable summary of the result."""
        lines = [
            f"Phase Estimation Result ({self.method})",
            f"  Bits of precision: {self.num_bits}",
            f"  Phase: {self.phase:.8f}",
            f"  Phase fraction: {self.phase_fraction:.8f}",
            f"  Oracle queries: {self.oracle_queries}",
        ]
        if self.energy is not None:
            lines.append(f"  Energy: {self.energy:.8f}")
        if self.resolved_energy is not None:
            lines.append(f"  Resolved energy: {self.resolved_energy:.8f}")
        if self.bits_msb_first is not None:
            lines.append(f"  Bitstring: {self.bitstring_msb_first}")
        return "\n".join(lines)

    def to_json(self) -> dict[str, Any]:
        """Convert the result to a JSON-compatible dictionary."""
        data: dict[str, Any] = {
            "version": self._serialization_version,
            "method": self.method,
            "num_bits": self.num_bits,
            "phase": self.phase,
            "canonical_phase": self.canonical_phase,
            "phase_fraction": self.phase_fraction,
            "oracle_queries": self.oracle_queries,
            "unitary_applications": self.unitary_applications,
            "iterations": [asdict(iteration) for iteration in self.iterations],
        }
        if self.evolution_time is not None:
            data["evolution_time"] = self.evolution_time
            data["energy"] = self.energy
            data["branching"] = list(self.branching or ())
        if self.resolved_energy is not None:
            data["resolved_energy"] = self.resolved_energy
        if self.bits_msb_first is not None:
            data["bits_msb_first"] = list(self.bits_msb_first)
        if self.metadata is not None:
            data["metadata"] = self.metadata
        return data

    @classmethod
    def from_json(cls, json_data: dict[str, Any]) -> "PhaseEstimationResult":
        """Create a result from a dictionary produced by :meth:`to_json`.

        Raises:
            RuntimeError: If the version field is missing or incompatible.

        """
        cls._validate_version(json_data.get("version"))
        branching = json_data.get("branching")
        bits = json_data.get("bits_msb_first")
        return cls(
            method=json_data["method"],
            num_bits=json_data["num_bits"],
            phase=json_data["phase"],
            canonical_phase=json_data["canonical_phase"],
            phase_fraction=json_data["phase_fraction"],
            oracle_queries=json_data["oracle_queries"],
            unitary_applications=json_data["unitary_applications"],
            evolution_time=json_data.get("evolution_time"),
            energy=json_data.get("energy"),
            branching=None if branching is None else tuple(branching),
            resolved_energy=json_data.get("resolved_energy"),
            bits_msb_first=None if bits is None else tuple(bits),
            iterations=tuple(RobustPhaseEstimationIteration(**item) for item in json_data.get("iterations", [])),
            metadata=json_data.get("metadata"),
        )

    def to_json_file(self, filename: str | Path) -> None:
        """Write the result to a ``.phase_estimation_result.json`` file."""
        path = self._check_filename(filename, ".json")
        with path.open("w") as f:
            json.dump(self.to_json(), f, indent=2)

    @classmethod
    def from_json_file(cls, filename: str | Path) -> "PhaseEstimationResult":
        """Read a result written by :meth:`to_json_file`."""
        path = cls._check_filename(filename, ".json")
        with path.open("r") as f:
            return cls.from_json(json.load(f))

    def to_hdf5(self, group: h5py.Group) -> None:
        """Save the result to an HDF5 group."""
        group.attrs["version"] = self._serialization_version
        for key in (
            "method",
            "num_bits",
            "phase",
            "canonical_phase",
            "phase_fraction",
            "oracle_queries",
            "unitary_applications",
        ):
            group.attrs[key] = getattr(self, key)
        if self.evolution_time is not None:
            group.attrs["evolution_time"] = self.evolution_time
            group.attrs["energy"] = self.energy
            group.create_dataset("branching", data=np.array(self.branching or ()))
        if self.resolved_energy is not None:
            group.attrs["resolved_energy"] = self.resolved_energy
        if self.bits_msb_first is not None:
            group.create_dataset("bits_msb_first", data=np.array(self.bits_msb_first, dtype=np.int64))
        if self.iterations:
            table = np.array([[getattr(it, name) for name in _ITERATION_FIELDS] for it in self.iterations])
            dataset = group.create_dataset("iterations", data=table)
            dataset.attrs["columns"] = json.dumps(_ITERATION_FIELDS)
        if self.metadata is not None:
            # HDF5 attributes cannot hold nested dictionaries
            group.attrs["metadata"] = json.dumps(self.metadata)

    @classmethod
    def from_hdf5(cls, group: h5py.Group) -> "PhaseEstimationResult":
        """Load a result from an HDF5 group.

        Raises:
            RuntimeError: If the version attribute is missing or incompatible.

        """
        cls._validate_version(group.attrs.get("version"))
        attrs = group.attrs

        iterations: tuple[RobustPhaseEstimationIteration, ...] = ()
        if "iterations" in group:
            rows = group["iterations"][()]
            iterations = tuple(
                RobustPhaseEstimationIteration(
                    exponent=int(row[0]),
                    power=int(row[1]),
                    n_repeats=int(row[2]),
                    p_zero=int(row[3]),
                    p_plus=int(row[4]),
                    local_phase=float(row[5]),
                    correction=float(row[6]),
                    phase_estimate=float(row[7]),
                )
                for row in rows
            )

        return cls(
            method=str(attrs["method"]),
            num_bits=int(attrs["num_bits"]),
            phase=float(attrs["phase"]),
            canonical_phase=float(attrs["canonical_phase"]),
            phase_fraction=float(attrs["phase_fraction"]),
            oracle_queries=int(attrs["oracle_queries"]),
            unitary_applications=int(attrs["unitary_applications"]),
            evolution_time=float(attrs["evolution_time"]) if "evolution_time" in attrs else None,
            energy=float(attrs["energy"]) if "energy" in attrs else None,
            branching=tuple(float(value) for value in group["branching"][()]) if "branching" in group else None,
            resolved_energy=float(attrs["resolved_energy"]) if "resolved_energy" in attrs else None,
            bits_msb_first=tuple(int(bit) for bit in group["bits_msb_first"][()])
            if "bits_msb_first" in group
            else None,
            iterations=iterations,
            metadata=json.loads(attrs["metadata"]) if "metadata" in attrs else None,
        )

    @classmethod
    def _validate_version(cls, version: Any) -> None:
        if version is None:
            raise RuntimeError(f"Serialized {cls._data_type_name} is missing its version field.")
        if str(version) != cls._serialization_version:
            raise RuntimeError(
                f"Unsupported {cls._data_type_name} version {version}; expected {cls._serialization_version}.",
            )

    @classmethod
    def _check_filename(cls, filename: str | Path, extension: str) -> Path:
        path = Path(filename)
        suffix = f".{cls._data_type_name}{extension}"
        if not path.name.endswith(suffix):
            raise ValueError(f"Filename '{path.name}' must end with '{suffix}'.")
        return path
