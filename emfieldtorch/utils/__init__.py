"""
Utility functions for emfieldtorch.

This module provides vector arithmetic, input coercion and the
containment predicates used by material volumes.
"""

from .code_utils import (
    is_scalar,
    as_vector3,
    as_array_n_by_dim,
    as_points,
    restore_shape,
)
from .model_builder import (
    get_indices_sphere,
    get_indices_box,
    get_indices_cylinder,
)
from . import vector_math


__all__ = [
    "is_scalar",
    "as_vector3",
    "as_array_n_by_dim",
    "as_points",
    "restore_shape",
    "get_indices_sphere",
    "get_indices_box",
    "get_indices_cylinder",
    "vector_math",
]
