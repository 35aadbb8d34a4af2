"""
Electromagnetic energy flow.

Both quantities use vacuum properties unless a material list and sample
position are supplied, in which case the local material is used. Inside a
material with zero permeability the magnetic terms vanish.
"""

import torch

from ..constants import EPSILON_0, MU_0
from ..utils import vector_math
from .material_coupling import material_properties_at


def _local_constants(materials, position):
    if materials is None or position is None:
        return EPSILON_0, MU_0

    permittivity_r, permeability_r, _ = material_properties_at(position, materials)
    epsilon = EPSILON_0 * permittivity_r
    mu = MU_0 * permeability_r
    if torch.is_tensor(epsilon) and epsilon.ndim == 1:
        epsilon = epsilon.unsqueeze(1)
        mu = mu.unsqueeze(1)
    return epsilon, mu


def _inverse(mu):
    """``1 / mu``, zero where ``mu`` vanishes."""
    mu = torch.as_tensor(mu, dtype=torch.float64)
    nonzero = mu > 0
    safe = torch.where(nonzero, mu, torch.ones_like(mu))
    return torch.where(nonzero, 1 / safe, torch.zeros_like(mu))


def poynting_vector(electric, magnetic, materials=None, position=None):
    """
    Poynting vector ``S = (E x B) / mu``.

    Parameters
    ----------
    electric, magnetic : torch.Tensor
        Fields of shape (3,) or (n, 3)
    materials : list of Material, optional
        When given together with ``position``, mu is taken from the local
        material; otherwise the vacuum value is used.
    position : array_like, optional
        Sample point(s) matching the fields

    Returns
    -------
    torch.Tensor
        Energy flux density in W/m^2, same shape as the fields
    """
    electric = torch.as_tensor(electric, dtype=torch.float64)
    magnetic = torch.as_tensor(magnetic, dtype=torch.float64)
    _, mu = _local_constants(materials, position)
    return vector_math.cross(electric, magnetic) * _inverse(mu)


def energy_density(electric, magnetic, materials=None, position=None):
    """
    Electromagnetic energy density ``0.5 (eps |E|^2 + |B|^2 / mu)``.

    Returns
    -------
    torch.Tensor
        Energy density in J/m^3; a scalar tensor for single fields, shape
        (n,) for batches
    """
    electric = torch.as_tensor(electric, dtype=torch.float64)
    magnetic = torch.as_tensor(magnetic, dtype=torch.float64)
    epsilon, mu = _local_constants(materials, position)

    e2 = torch.sum(electric**2, dim=-1, keepdim=True)
    b2 = torch.sum(magnetic**2, dim=-1, keepdim=True)
    density = 0.5 * (epsilon * e2 + b2 * _inverse(mu))
    return density.squeeze(-1)
