"""
Vector payload utilities.

Object vectors are accepted as lists, tuples or numpy arrays and sent to the
store as plain JSON float lists.
"""

from typing import Any, List, Sequence, Union

import numpy as np

from ..core.exceptions import ValidationError


VectorLike = Union[Sequence[float], np.ndarray]

# Norms below this cannot be scaled to unit length
MIN_NORM = 1e-12


def normalize_vector(array: np.ndarray) -> np.ndarray:
    """
    Scale a float vector to unit L2 norm for cosine-distance collections.

    Raises:
        ValidationError: If the vector has (near) zero length
    """
    norm = float(np.linalg.norm(array))
    if norm < MIN_NORM:
        raise ValidationError("Cannot normalize a zero-length vector")
    return array / norm


def to_vector_list(vector: Any, normalize: bool = False) -> List[float]:
    """
    Convert a vector-like value to a JSON-ready list of floats.

    Args:
        vector: List, tuple or 1-D numpy array of numbers
        normalize: Whether to L2-normalize before conversion

    Returns:
        List of Python floats

    Raises:
        ValidationError: If the vector is empty, not 1-D or not finite, or
            has zero length when normalizing
    """
    try:
        array = np.asarray(vector, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Vector must contain only numbers: {e}") from e

    if array.ndim != 1:
        raise ValidationError(f"Vector must be 1-dimensional, got shape {array.shape}")

    if array.size == 0:
        raise ValidationError("Vector cannot be empty")

    if not np.all(np.isfinite(array)):
        raise ValidationError("Vector contains NaN or infinite values")

    if normalize:
        array = normalize_vector(array)

    return array.tolist()
