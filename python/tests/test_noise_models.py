"""Tests for quantum error profiles."""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from pathlib import Path

import pytest
from qiskit_aer.noise import NoiseModel

from qdk_rpe.noise_models import QuantumErrorProfile, SupportedErrorTypes


class TestQuantumErrorProfile:
    """Tests for the QuantumErrorProfile class."""

    def test_gate_names_are_normalized(self):
        """Gate names are stored in lower case with validated error types."""
        profile = QuantumErrorProfile(
            name="upper",
            description="Upper-case gates",
            errors={"H": {"type": "DEPOLARIZING_ERROR", "rate": 0.01, "num_qubits": 1}},
        )
        assert list(profile.errors) == ["h"]
        assert profile.errors["h"]["type"] is SupportedErrorTypes.DEPOLARIZING_ERROR
        assert profile.basis_gates == ["h"]

    def test_unsupported_qubit_count(self):
        """Only one- and two-qubit gate errors are supported."""
        with pytest.raises(ValueError, match="Unsupported number of qubits"):
            QuantumErrorProfile(
                name="bad",
                description="Three-qubit error",
                errors={"ccx": {"type": "depolarizing_error", "rate": 0.01, "num_qubits": 3}},
            )

    def test_unsupported_error_type(self):
        """Unknown error channels are rejected."""
        with pytest.raises(ValueError, match="not a valid SupportedErrorTypes"):
            QuantumErrorProfile(
                name="bad",
                description="Unknown channel",
                errors={"h": {"type": "amplitude_damping", "rate": 0.01, "num_qubits": 1}},
            )

    @pytest.mark.parametrize("readout_error", [-0.01, 0.5])
    def test_readout_error_range(self, readout_error):
        """Readout errors must lie in [0, 0.5)."""
        with pytest.raises(ValueError, match="readout_error"):
            QuantumErrorProfile(name="bad", description="Readout", readout_error=readout_error)

    def test_to_noise_model(self, simple_error_profile):
        """Profiles convert into Aer noise models on the noisy gates and measurements."""
        noise_model = simple_error_profile.to_noise_model()
        assert isinstance(noise_model, NoiseModel)
        assert {"h", "cx"} <= set(noise_model.noise_instructions)
        assert "measure" in noise_model.noise_instructions
        assert {"h", "cx", "rz", "sx"} <= set(noise_model.basis_gates)

    def test_yaml_round_trip(self, simple_error_profile, temp_directory):
        """Saving and loading a profile preserves every field."""
        path = Path(temp_directory) / "simple.yaml"
        simple_error_profile.to_yaml(path)
        loaded = QuantumErrorProfile.from_yaml(path)
        assert loaded.to_dict() == simple_error_profile.to_dict()

    def test_from_yaml_missing_file(self, temp_directory):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="not found"):
            QuantumErrorProfile.from_yaml(Path(temp_directory) / "missing.yaml")

    def test_from_yaml_empty_file(self, temp_directory):
        """Empty files are rejected."""
        path = Path(temp_directory) / "empty.yaml"
        path.write_text("")
        with pytest.raises(ValueError, match="empty or invalid"):
            QuantumErrorProfile.from_yaml(path)

    def test_from_yaml_invalid_keys(self, temp_directory):
        """Unknown top-level keys are rejected."""
        path = Path(temp_directory) / "invalid.yaml"
        path.write_text("name: test\nshots: 100\n")
        with pytest.raises(ValueError, match="Invalid keys"):
            QuantumErrorProfile.from_yaml(path)

    def test_from_yaml_defaults(self, temp_directory):
        """Omitted fields take their defaults."""
        path = Path(temp_directory) / "minimal.yaml"
        path.write_text("readout_error: 0.01\n")
        profile = QuantumErrorProfile.from_yaml(path)
        assert profile.name == "default"
        assert profile.errors == {}
        assert profile.readout_error == pytest.approx(0.01)
