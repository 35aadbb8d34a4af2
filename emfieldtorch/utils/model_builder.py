"""
Containment utilities for material volumes.

This module provides the point-in-volume predicates used to decide which
material, if any, occupies a set of sample points.
"""

import torch
import numpy as np
from typing import Union


def _as_tensor(value):
    if not isinstance(value, torch.Tensor):
        value = torch.tensor(value, dtype=torch.float64)
    return value.to(dtype=torch.float64)


def _offsets(center, points):
    center = _as_tensor(center)
    points = _as_tensor(points)

    # Ensure center is the right shape
    if center.dim() == 0:
        center = center.unsqueeze(0)
    if points.dim() == 1:
        points = points.unsqueeze(0)

    # Validation: points and center live in the same dimensional space
    dim_points = points.shape[1]
    dim_center = center.shape[0]

    if dim_center != dim_points:
        raise ValueError(
            f"Dimension mismatch: center has dimension {dim_center} "
            f"but points have dimension {dim_points}"
        )

    # Broadcasting: (n_points, dim) - (dim,) -> (n_points, dim)
    return points - center


def get_indices_sphere(
    center: Union[torch.Tensor, np.ndarray, list],
    radius: float,
    points: Union[torch.Tensor, np.ndarray],
) -> torch.Tensor:
    """
    Get boolean indices for points that lie inside a sphere.

    The boundary counts as inside.

    Parameters
    ----------
    center : torch.Tensor, numpy.ndarray, or list
        Location of the center of the sphere. Should be (dim,) shaped.
    radius : float
        Radius of the sphere
    points : torch.Tensor or numpy.ndarray
        Point locations with shape (n_points, dim)

    Returns
    -------
    torch.Tensor
        Boolean tensor of shape (n_points,) indicating which points are inside the sphere

    Examples
    --------
    >>> import torch
    >>> from emfieldtorch.utils import get_indices_sphere
    >>>
    >>> points = torch.tensor([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]])
    >>> get_indices_sphere([0.0, 0.0, 0.0], 1.0, points)
    tensor([ True, False])
    """
    delta = _offsets(center, points)

    # Squared distances avoid a sqrt and keep the boundary exact
    return torch.sum(delta**2, dim=1) <= radius**2


def get_indices_box(
    center: Union[torch.Tensor, np.ndarray, list],
    dimensions: Union[torch.Tensor, np.ndarray, list],
    points: Union[torch.Tensor, np.ndarray],
) -> torch.Tensor:
    """
    Get boolean indices for points that lie inside an axis-aligned box.

    Parameters
    ----------
    center : torch.Tensor, numpy.ndarray, or list
        Location of the center of the box. Should be (dim,) shaped.
    dimensions : torch.Tensor, numpy.ndarray, or list
        Half-widths of the box in each dimension. Should be (dim,) shaped.
    points : torch.Tensor or numpy.ndarray
        Point locations with shape (n_points, dim).

    Returns
    -------
    torch.Tensor
        Boolean tensor of shape (n_points,) indicating which points are inside the box

    Examples
    --------
    >>> import torch
    >>> from emfieldtorch.utils.model_builder import get_indices_box
    >>>
    >>> points = torch.tensor([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0], [2.0, 2.0, 2.0]])
    >>> mask = get_indices_box([1.0, 1.0, 1.0], [0.8, 0.8, 0.8], points)
    """
    delta = _offsets(center, points)
    dimensions = _as_tensor(dimensions)
    if dimensions.dim() == 0:
        dimensions = dimensions.unsqueeze(0)

    if dimensions.shape[0] != delta.shape[1]:
        raise ValueError("Dimension mismatch between center, dimensions, and points")

    return torch.all(torch.abs(delta) <= dimensions, dim=1)


def get_indices_cylinder(
    center: Union[torch.Tensor, np.ndarray, list],
    radius: float,
    height: float,
    points: Union[torch.Tensor, np.ndarray],
) -> torch.Tensor:
    """
    Get boolean indices for points inside a cylinder whose axis is parallel to y.

    Parameters
    ----------
    center : torch.Tensor, numpy.ndarray, or list
        Location of the center of the cylinder, shape (3,).
    radius : float
        Cylinder radius measured in the xz-plane.
    height : float
        Full extent of the cylinder along y.
    points : torch.Tensor or numpy.ndarray
        Point locations with shape (n_points, 3).

    Returns
    -------
    torch.Tensor
        Boolean tensor of shape (n_points,)
    """
    delta = _offsets(center, points)
    if delta.shape[1] != 3:
        raise ValueError("Cylinder containment is only defined in 3D")

    radial = torch.sqrt(delta[:, 0] ** 2 + delta[:, 2] ** 2)
    return (radial <= radius) & (torch.abs(delta[:, 1]) <= height / 2)
