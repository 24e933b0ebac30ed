"""Shared typing aliases used across ramanmix."""

import numpy as np
import numpy.typing as npt

FloatArray = npt.NDArray[np.float64]
