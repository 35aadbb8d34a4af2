"""
Material volumes for emfieldtorch.

A :class:`Material` couples electromagnetic properties with a simple volume
(sphere, box or cylinder). Points outside every volume are vacuum.
"""

import warnings

import torch

from .constants import EPSILON_0, MU_0
from .sources import InvalidParameter, _finite_scalar, _finite_vector, _positive_scalar
from .utils import (
    as_points,
    get_indices_box,
    get_indices_cylinder,
    get_indices_sphere,
)


class BaseGeometry:
    """Base class for material volume shapes."""

    def contains(self, center, points):
        """
        Boolean mask of the points inside the volume centered at ``center``.

        Parameters
        ----------
        center : torch.Tensor
            Volume center, shape (3,)
        points : torch.Tensor
            Points, shape (n, 3)

        Returns
        -------
        torch.Tensor
            Boolean tensor of shape (n,)
        """
        raise NotImplementedError("contains must be implemented in derived classes")

    def bounding_radius(self):
        """Radius of a sphere around the center enclosing the whole volume."""
        raise NotImplementedError(
            "bounding_radius must be implemented in derived classes"
        )


class Sphere(BaseGeometry):
    def __init__(self, radius):
        self.radius = _positive_scalar(radius, "radius")

    def contains(self, center, points):
        return get_indices_sphere(center, self.radius, points)

    def bounding_radius(self):
        return self.radius

    def __repr__(self):
        return f"Sphere(radius={self.radius})"


class Box(BaseGeometry):
    """Axis-aligned box given by its full width (x), height (y) and depth (z)."""

    def __init__(self, width, height, depth):
        self.width = _positive_scalar(width, "width")
        self.height = _positive_scalar(height, "height")
        self.depth = _positive_scalar(depth, "depth")

    def contains(self, center, points):
        half_widths = [self.width / 2, self.height / 2, self.depth / 2]
        return get_indices_box(center, half_widths, points)

    def bounding_radius(self):
        return 0.5 * (self.width**2 + self.height**2 + self.depth**2) ** 0.5

    def __repr__(self):
        return f"Box(width={self.width}, height={self.height}, depth={self.depth})"


class Cylinder(BaseGeometry):
    """Cylinder with its axis parallel to y."""

    def __init__(self, radius, height):
        self.radius = _positive_scalar(radius, "radius")
        self.height = _positive_scalar(height, "height")

    def contains(self, center, points):
        return get_indices_cylinder(center, self.radius, self.height, points)

    def bounding_radius(self):
        return (self.radius**2 + (self.height / 2) ** 2) ** 0.5

    def __repr__(self):
        return f"Cylinder(radius={self.radius}, height={self.height})"


class Material:
    """
    Homogeneous material filling a volume.

    Parameters
    ----------
    geometry : BaseGeometry
        Volume shape
    location : array_like
        Center of the volume [x, y, z]
    permittivity_r : float, default: 1.0
        Relative permittivity, at least 1
    permeability_r : float, default: 1.0
        Relative permeability, non-negative
    conductivity : float, default: 0.0
        Conductivity in S/m, non-negative
    name : str, optional
        Display name
    identifier : str, optional
        Identity assigned by the scene store
    """

    def __init__(
        self,
        geometry,
        location=(0.0, 0.0, 0.0),
        permittivity_r=1.0,
        permeability_r=1.0,
        conductivity=0.0,
        name=None,
        identifier=None,
    ):
        if geometry is not None and not isinstance(geometry, BaseGeometry):
            raise InvalidParameter(f"geometry must be a BaseGeometry, got {geometry!r}")
        self.geometry = geometry
        self.location = _finite_vector(location, "location")

        self.permittivity_r = _finite_scalar(permittivity_r, "permittivity_r")
        if self.permittivity_r < 1:
            raise InvalidParameter(
                f"permittivity_r must be at least 1, got {self.permittivity_r}"
            )
        self.permeability_r = _finite_scalar(permeability_r, "permeability_r")
        if self.permeability_r < 0:
            raise InvalidParameter(
                f"permeability_r must be non-negative, got {self.permeability_r}"
            )
        self.conductivity = _finite_scalar(conductivity, "conductivity")
        if self.conductivity < 0:
            raise InvalidParameter(
                f"conductivity must be non-negative, got {self.conductivity}"
            )
        self.name = name
        self.identifier = identifier

    @property
    def permittivity(self):
        """Absolute permittivity in F/m"""
        return EPSILON_0 * self.permittivity_r

    @property
    def permeability(self):
        """Absolute permeability in H/m"""
        return MU_0 * self.permeability_r

    @property
    def is_vacuum(self):
        return self.geometry is None

    def contains(self, position):
        """
        Containment test for one point (returns bool) or a batch (returns a mask).
        """
        pts, single = as_points(position)
        if self.geometry is None:
            mask = torch.zeros(pts.shape[0], dtype=torch.bool)
        else:
            mask = self.geometry.contains(self.location, pts)
        if single:
            return bool(mask[0])
        return mask

    def __repr__(self):
        label = self.name if self.name is not None else type(self.geometry).__name__
        return (
            f"Material({label!r}, eps_r={self.permittivity_r}, "
            f"mu_r={self.permeability_r}, sigma={self.conductivity})"
        )


VACUUM = Material(None, name="Vacuum", identifier="vacuum")


def check_overlaps(materials):
    """
    Warn about material volumes whose bounding spheres intersect.

    Overlapping volumes resolve to the first material in list order; this
    helper only flags likely overlaps so scene authors can reorder them.

    Returns
    -------
    list of tuple
        Index pairs ``(i, j)`` of possibly overlapping materials
    """
    pairs = []
    for i, first in enumerate(materials):
        for j in range(i + 1, len(materials)):
            second = materials[j]
            gap = torch.linalg.norm(first.location - second.location).item()
            reach = first.geometry.bounding_radius() + second.geometry.bounding_radius()
            if gap < reach:
                pairs.append((i, j))

    if pairs:
        warnings.warn(
            f"Material volumes {pairs} may overlap; the first material in list "
            "order wins inside the overlap.",
            stacklevel=2,
        )
    return pairs
