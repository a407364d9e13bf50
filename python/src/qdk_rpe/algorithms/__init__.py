"""Algorithm abstractions for QDK/RPE."""

# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See LICENSE.txt in the project root for license information.
# --------------------------------------------------------------------------------------------

from qdk_rpe.algorithms.base import Algorithm

__all__ = ["Algorithm"]
