"""
Material-dependent field scaling.

The material at a point is the first material, in list order, whose volume
contains it; points outside every volume are vacuum. Overlapping volumes are
not blended.
"""

import math

import torch

from ..materials import VACUUM
from ..utils import as_points, restore_shape


def material_at(position, materials):
    """
    First material containing a single point, or ``VACUUM``.

    Parameters
    ----------
    position : array_like
        Sample point (3,)
    materials : list of Material
        Candidate materials in priority order

    Returns
    -------
    Material
    """
    for material in materials:
        if material.contains(position):
            return material
    return VACUUM


def material_properties_at(position, materials):
    """
    Relative permittivity, relative permeability and conductivity per point.

    Batched counterpart of :func:`material_at`.

    Returns
    -------
    permittivity_r, permeability_r, conductivity : torch.Tensor
        Each of shape (n,), or scalar tensors for a single point
    """
    pts, single = as_points(position)
    n_pts = pts.shape[0]

    permittivity_r = torch.full((n_pts,), VACUUM.permittivity_r, dtype=torch.float64)
    permeability_r = torch.full((n_pts,), VACUUM.permeability_r, dtype=torch.float64)
    conductivity = torch.full((n_pts,), VACUUM.conductivity, dtype=torch.float64)
    assigned = torch.zeros(n_pts, dtype=torch.bool)

    for material in materials:
        hit = material.contains(pts) & ~assigned
        permittivity_r[hit] = material.permittivity_r
        permeability_r[hit] = material.permeability_r
        conductivity[hit] = material.conductivity
        assigned |= hit

    return (
        restore_shape(permittivity_r, single),
        restore_shape(permeability_r, single),
        restore_shape(conductivity, single),
    )


def apply_material_effect(field, kind, position, materials):
    """
    Scale a vacuum field by the local material.

    Electric fields are divided by the relative permittivity, magnetic
    fields multiplied by the relative permeability.

    Parameters
    ----------
    field : torch.Tensor
        Field of shape (3,) or (n, 3) sampled at ``position``
    kind : {'electric', 'magnetic'}
    position : array_like
        Sample point(s) matching ``field``
    materials : list of Material

    Returns
    -------
    torch.Tensor
        Scaled field with the shape of ``field``
    """
    if kind not in ("electric", "magnetic"):
        raise ValueError(f"kind must be 'electric' or 'magnetic', got {kind!r}")

    field = torch.as_tensor(field, dtype=torch.float64)
    permittivity_r, permeability_r, _ = material_properties_at(position, materials)

    if kind == "electric":
        factor = 1 / permittivity_r
    else:
        factor = permeability_r

    if field.ndim == 2:
        factor = factor.unsqueeze(1)
    return field * factor


def wave_impedance(material):
    """Intrinsic impedance ``sqrt(mu / eps)`` in Ohm"""
    return (material.permeability / material.permittivity) ** 0.5


def wave_velocity(material):
    """Phase velocity ``1 / sqrt(mu eps)`` in m/s"""
    product = material.permeability * material.permittivity
    if product == 0:
        return math.inf
    return 1 / product**0.5
