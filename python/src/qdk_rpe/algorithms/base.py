"""QDK/RPE Algorithms Base Class.

This module defines the base class for algorithms that run inside the
QDK/RPE framework.
"""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from abc import ABC, abstractmethod

from qdk_rpe.settings import Settings

__all__: list[str] = ["Algorithm"]


class Algorithm(ABC):
    """Base class for algorithms in QDK/RPE.

    In derived classes, call ``super().__init__()`` and replace the ``_settings``
    attribute when the algorithm needs its own options. Settings are locked the
    first time :meth:`run` is called.

    Examples:
        >>> from qdk_rpe.phase_estimation import RobustPhaseEstimation
        >>> rpe = RobustPhaseEstimation(num_bits=8)
        >>> rpe.settings().get("num_bits")
        8

    """

    def __init__(self):
        """Initialize the base algorithm."""
        super().__init__()
        self._settings = Settings()

    @abstractmethod
    def _run_impl(self, *args, **kwargs):
        """The implementation of the algorithm.

        Args:
            args: The arguments required to run the algorithm.
            kwargs: The keyword arguments required to run the algorithm.

        Returns:
            * The results of the algorithm

        """

    def run(self, *args, **kwargs):
        """Lock the settings and run the algorithm with the provided arguments.

        Args:
            args: The arguments required to run the algorithm.
            kwargs: The keyword arguments required to run the algorithm.

        Returns:
            * The results of the algorithm

        """
        self._settings.lock()
        return self._run_impl(*args, **kwargs)

    def settings(self) -> Settings:
        """Return the settings associated with this algorithm."""
        return self._settings

    @abstractmethod
    def type_name(self) -> str:
        """Return the name of the algorithm type, for example ``"phase_estimation"``."""

    @abstractmethod
    def name(self) -> str:
        """Return the main name of the algorithm, for example ``"robust"``."""

    def aliases(self) -> list[str]:
        """Return all aliases of the algorithm's name including the main name."""
        return [self.name()]
