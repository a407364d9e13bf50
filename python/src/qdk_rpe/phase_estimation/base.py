"""Base classes for phase estimation algorithms in QDK/RPE.

Concrete algorithms inherit from :class:`PhaseEstimation`, declare the
:class:`PhaseEstimationAlgorithm` they implement and run against a
:class:`~qdk_rpe.oracles.DiscreteOracle` and an eigenstate
:class:`~qdk_rpe.backends.Register`.
"""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from __future__ import annotations

from abc import abstractmethod
from enum import StrEnum
from typing import TYPE_CHECKING, TypeVar, cast

from qdk_rpe.algorithms.base import Algorithm
from qdk_rpe.settings import Settings

if TYPE_CHECKING:
    from collections.abc import Iterable

    from qdk_rpe.backends import Register
    from qdk_rpe.data import PhaseEstimationResult
    from qdk_rpe.oracles import DiscreteOracle

AlgorithmT = TypeVar("AlgorithmT", bound="PhaseEstimation")

__all__: list[str] = ["PhaseEstimation", "PhaseEstimationAlgorithm", "PhaseEstimationSettings"]


class PhaseEstimationAlgorithm(StrEnum):
    """Enumeration of supported phase estimation routines.

    References:
        * Robust phase estimation: Kimmel, S., Low, G. H., & Yoder, T. J. (2015).
            "Robust calibration of a universal single-qubit gate set via robust phase
            estimation." Phys. Rev. A 92, 062315. https://arxiv.org/abs/1502.02677
        * Iterative QPE: Kitaev, A. (1995). "Quantum measurements and the Abelian
            Stabilizer Problem." arXiv:quant-ph/9511026. https://arxiv.org/abs/quant-ph/9511026

    """

    ROBUST = "robust"
    ITERATIVE = "iterative"


class PhaseEstimationSettings(Settings):
    """Settings shared by every phase estimation algorithm."""

    def __init__(self):
        """Register the ``num_bits`` setting.

        ``num_bits`` defaults to -1 and must be set to a positive value before running.
        """
        super().__init__()
        self._set_default("num_bits", "int", -1, "The number of bits of precision to estimate.")


class PhaseEstimation(Algorithm):
    """Abstract interface for phase estimation strategies."""

    algorithm: PhaseEstimationAlgorithm | None = None

    def __init__(self, num_bits: int = -1):
        """Store the requested precision.

        Args:
            num_bits: Number of bits of precision. Defaults to -1; a positive value must be set before running.

        """
        super().__init__()
        self._settings = PhaseEstimationSettings()
        self._settings.set("num_bits", num_bits)

    def type_name(self) -> str:
        """Return the algorithm type name as phase_estimation."""
        return "phase_estimation"

    def name(self) -> str:
        """Return the algorithm name registered in :class:`PhaseEstimationAlgorithm`."""
        return str(self.algorithm)

    @abstractmethod
    def _run_impl(self, oracle: DiscreteOracle, eigenstate: Register) -> PhaseEstimationResult:
        """Estimate the eigenphase of the oracle's unitary on ``eigenstate``.

        Args:
            oracle: Capability applying controlled powers of the unitary.
            eigenstate: Register prepared in an eigenstate of the unitary.

        Returns:
            The estimated phase and associated metadata.

        """

    def _num_bits(self) -> int:
        num_bits = self._settings.get("num_bits")
        if num_bits < 1:
            raise ValueError(f"num_bits must be a positive integer, received {num_bits}.")
        return num_bits

    @classmethod
    def from_algorithm(
        cls: type[AlgorithmT],
        algorithm: PhaseEstimationAlgorithm | str | None,
        **kwargs,
    ) -> AlgorithmT:
        """Factory method returning the requested phase estimation strategy.

        Args:
            algorithm: Identifier for the desired algorithm.

                ``None`` selects :class:`PhaseEstimationAlgorithm.ROBUST`.

            kwargs: Options forwarded to the algorithm constructor.

        Raises:
            ValueError: If the requested algorithm is unknown or not implemented.

        """
        normalized_algorithm = cls._normalize_algorithm(algorithm)

        for subclass in cls._iter_subclasses():
            if subclass.algorithm == normalized_algorithm:
                return cast("AlgorithmT", subclass(**kwargs))

        raise ValueError(f"Phase estimation algorithm {normalized_algorithm.value} is not implemented.")

    @staticmethod
    def _normalize_algorithm(algorithm: PhaseEstimationAlgorithm | str | None) -> PhaseEstimationAlgorithm:
        if algorithm is None:
            return PhaseEstimationAlgorithm.ROBUST
        if isinstance(algorithm, PhaseEstimationAlgorithm):
            return algorithm
        try:
            return PhaseEstimationAlgorithm(algorithm.lower())
        except ValueError as exc:
            raise ValueError(f"Unrecognized phase estimation algorithm '{algorithm}'.") from exc

    @classmethod
    def _iter_subclasses(cls) -> Iterable[type[PhaseEstimation]]:
        for subclass in cls.__subclasses__():
            yield subclass
            yield from subclass._iter_subclasses()  # noqa: SLF001
