"""Normalization of the assembled magnitude matrix."""

import numpy as np


def normalize_by_max(matrix, global_max):
    """Scale ``matrix`` into [0, 1] by the global maximum.

    A non-positive maximum (silence, empty input) leaves the values as they
    are instead of dividing by zero. Always returns a new array.
    """
    matrix = np.asarray(matrix)
    if global_max <= 0:
        return matrix.copy()
    return matrix / global_max
