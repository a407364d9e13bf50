"""QDK/RPE noise model module for simulating SPAM and gate errors."""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any, ClassVar, TypedDict

from qiskit_aer.noise import NoiseModel, ReadoutError, depolarizing_error
from ruamel.yaml import YAML

__all__: list[str] = ["GateErrorDef", "QuantumErrorProfile", "SupportedErrorTypes"]


class CaseInsensitiveStrEnum(StrEnum):
    """StrEnum that allows case-insensitive lookup of values."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        raise ValueError(f"{value} is not a valid {cls.__name__}")


class SupportedErrorTypes(CaseInsensitiveStrEnum):
    """Supported gate error channels."""

    DEPOLARIZING_ERROR = "depolarizing_error"


class GateErrorDef(TypedDict):
    """Typed dictionary for gate error definitions."""

    type: SupportedErrorTypes
    """Error type."""

    rate: float
    """Error rate."""

    num_qubits: int
    """Number of qubits the gate acts on."""


#: Instructions that never enter the basis gate list of a noise model.
BASIS_GATES_EXCLUSION = {"reset", "barrier", "measure"}


@dataclass
class QuantumErrorProfile:
    """Gate and readout error rates describing a noisy device.

    Profiles are stored as YAML files and converted to Qiskit Aer noise models
    by :meth:`to_noise_model`.
    """

    name: str
    """Name of the quantum error profile."""

    description: str
    """Description of what the error profile represents."""

    errors: dict[str, GateErrorDef] = field(default_factory=dict)
    """Mapping from gate name to its error definition."""

    readout_error: float = 0.0
    """Probability that a measurement reports the flipped outcome."""

    supported_yaml_keys: ClassVar[set[str]] = {"name", "description", "errors", "readout_error"}
    """YAML keys supported in the quantum error profile."""

    def __post_init__(self):
        """Normalize gate names and validate the error definitions."""
        normalized: dict[str, GateErrorDef] = {}
        for gate, error_def in self.errors.items():
            if error_def["num_qubits"] not in (1, 2):
                raise ValueError(f"Unsupported number of qubits: {error_def['num_qubits']}")
            if not 0.0 <= error_def["rate"] <= 1.0:
                raise ValueError(f"Error rate for gate {gate} must lie in [0, 1], received {error_def['rate']}.")
            normalized[str(gate).lower()] = GateErrorDef(
                type=SupportedErrorTypes(error_def["type"]),
                rate=float(error_def["rate"]),
                num_qubits=int(error_def["num_qubits"]),
            )
        self.errors = normalized
        if not 0.0 <= self.readout_error < 0.5:
            raise ValueError(f"readout_error must lie in [0, 0.5), received {self.readout_error}.")

    @property
    def basis_gates(self) -> list[str]:
        """Return the gates carrying errors, in a form usable as transpiler basis."""
        return sorted(gate for gate in self.errors if gate not in BASIS_GATES_EXCLUSION)

    def to_noise_model(self) -> NoiseModel:
        """Convert the profile into a :class:`qiskit_aer.noise.NoiseModel`."""
        basis_gates = sorted(set(self.basis_gates) | set(NoiseModel().basis_gates))
        noise_model = NoiseModel(basis_gates=basis_gates)
        for gate, error_def in self.errors.items():
            noise_model.add_all_qubit_quantum_error(
                depolarizing_error(error_def["rate"], error_def["num_qubits"]),
                [gate],
            )
        if self.readout_error:
            p = self.readout_error
            noise_model.add_all_qubit_readout_error(ReadoutError([[1 - p, p], [p, 1 - p]]))
        return noise_model

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary suitable for YAML serialization."""
        return {
            "name": self.name,
            "description": self.description,
            "errors": {
                gate: {"type": str(error_def["type"]), "rate": error_def["rate"], "num_qubits": error_def["num_qubits"]}
                for gate, error_def in self.errors.items()
            },
            "readout_error": self.readout_error,
        }

    @classmethod
    def from_yaml(cls, yaml_file: str | Path) -> "QuantumErrorProfile":
        """Load a quantum error profile from a YAML file.

        Args:
            yaml_file: Path to the YAML file.

        Returns:
            Loaded profile.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is empty or contains unsupported keys.

        """
        path = Path(yaml_file)
        if not path.exists():
            raise FileNotFoundError(f"File {yaml_file} not found")

        yaml = YAML(typ="safe")
        with path.open("r") as f:
            data = yaml.load(f)

        if data is None:
            raise ValueError(f"YAML file {yaml_file} is empty or invalid.")

        invalid_keys = set(data) - cls.supported_yaml_keys
        if invalid_keys:
            raise ValueError(f"Invalid keys in YAML file: {invalid_keys}. Only {cls.supported_yaml_keys} are allowed.")

        return cls(
            name=data.get("name", "default"),
            description=data.get("description", "No description provided"),
            errors=dict(data.get("errors") or {}),
            readout_error=float(data.get("readout_error", 0.0)),
        )

    def to_yaml(self, yaml_file: str | Path) -> None:
        """Save the quantum error profile to a YAML file."""
        yaml = YAML()
        yaml.default_flow_style = False
        yaml.indent(mapping=2, sequence=4, offset=2)
        with Path(yaml_file).open("w") as f:
            yaml.dump(self.to_dict(), f)
