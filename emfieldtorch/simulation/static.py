"""
Static and quasi-static source fields.

Electric fields follow Coulomb superposition over point charges. Magnetic
fields use closed-form approximations per current topology:

- infinite straight wire, ``B = mu0 |I| / (2 pi r)``
- current loop, on-axis dipole field only
- solenoid, uniform interior field and point-dipole exterior field

Loop and solenoid axes are parallel to y. Every evaluator accepts a single
point of shape (3,) or a batch of shape (n, 3).
"""

import math

import torch

from ..constants import (
    COULOMB_CONSTANT,
    LOOP_AXIS_TOLERANCE,
    MIN_DISTANCE,
    MU_0,
)
from ..sources import (
    ELECTRIC_SOURCE_TYPES,
    MAGNETIC_SOURCE_TYPES,
    Loop,
    PointCharge,
    Solenoid,
    Wire,
)
from ..utils import as_points, restore_shape, vector_math


def _separation(pts, source):
    """Offsets from the source and a guard mask for the singular region."""
    r = pts - source.location
    dist = torch.linalg.norm(r, dim=1)
    valid = dist >= MIN_DISTANCE
    safe = torch.where(valid, dist, torch.ones_like(dist))
    return r, safe, valid


def _masked(values, mask):
    return torch.where(mask.unsqueeze(1), values, torch.zeros_like(values))


def electric_field_at(position, sources, time=0.0):
    """
    Electric field from Coulomb superposition of point charges.

    Parameters
    ----------
    position : array_like
        Sample point (3,) or points (n, 3)
    sources : list
        Sources of any kind; only point charges contribute
    time : float, default: 0.0
        Evaluation time for oscillating charges

    Returns
    -------
    torch.Tensor
        Field of shape (3,) or (n, 3)
    """
    pts, single = as_points(position)
    field = torch.zeros_like(pts)

    for source in sources:
        if not isinstance(source, ELECTRIC_SOURCE_TYPES):
            continue
        r, dist, valid = _separation(pts, source)
        q = source.effective_strength(time)

        # k q r_hat / r^2
        contribution = COULOMB_CONSTANT * q * r / dist.unsqueeze(1) ** 3
        field = field + _masked(contribution, valid)

    return restore_shape(field, single)


def _wire_field(pts, wire):
    r, dist, valid = _separation(pts, wire)
    magnitude = MU_0 * abs(wire.current) / (2 * math.pi * dist)

    circulation = vector_math.cross(wire.direction, r)
    cross_norm = torch.linalg.norm(circulation, dim=1)
    valid = valid & (cross_norm > 0)

    sign = 1.0 if wire.current > 0 else -1.0
    field = sign * magnitude.unsqueeze(1) * vector_math.normalize(circulation)
    return _masked(field, valid)


def _loop_field(pts, loop):
    r, _, valid = _separation(pts, loop)
    on_axis = (torch.abs(r[:, 0]) < LOOP_AXIS_TOLERANCE) & (
        torch.abs(r[:, 2]) < LOOP_AXIS_TOLERANCE
    )
    axial = torch.abs(r[:, 1])
    # The loop plane itself is singular for the on-axis formula
    valid = valid & on_axis & (axial >= MIN_DISTANCE)
    safe_axial = torch.where(valid, axial, torch.ones_like(axial))

    field = torch.zeros_like(pts)
    field[:, 1] = MU_0 * loop.magnetic_moment / (2 * safe_axial**3)
    return _masked(field, valid)


def _solenoid_field(pts, solenoid):
    r, dist, valid = _separation(pts, solenoid)
    radial = torch.sqrt(r[:, 0] ** 2 + r[:, 2] ** 2)
    inside = (radial < solenoid.radius) & (torch.abs(r[:, 1]) < solenoid.length / 2)

    interior = torch.zeros_like(pts)
    interior[:, 1] = MU_0 * solenoid.turn_density * solenoid.current

    # Point-dipole far field along y
    moment = MU_0 * solenoid.turns * math.pi * solenoid.radius**2 * solenoid.current
    magnitude = moment / (4 * math.pi * dist**3)
    dist2 = dist**2
    exterior = torch.stack(
        [
            3 * magnitude * r[:, 0] * r[:, 1] / dist2,
            magnitude * (3 * r[:, 1] ** 2 / dist2 - 1),
            3 * magnitude * r[:, 2] * r[:, 1] / dist2,
        ],
        dim=1,
    )

    field = torch.where(inside.unsqueeze(1), interior, exterior)
    return _masked(field, valid)


def magnetic_field_at(position, sources, time=0.0):
    """
    Magnetic flux density from wires, loops and solenoids.

    Parameters
    ----------
    position : array_like
        Sample point (3,) or points (n, 3)
    sources : list
        Sources of any kind; only current-carrying sources contribute
    time : float, default: 0.0
        Evaluation time. Currents are steady, so the field does not depend on it.

    Returns
    -------
    torch.Tensor
        Field of shape (3,) or (n, 3)
    """
    pts, single = as_points(position)
    field = torch.zeros_like(pts)

    for source in sources:
        if not isinstance(source, MAGNETIC_SOURCE_TYPES):
            continue
        if isinstance(source, Wire):
            field = field + _wire_field(pts, source)
        elif isinstance(source, Loop):
            field = field + _loop_field(pts, source)
        elif isinstance(source, Solenoid):
            field = field + _solenoid_field(pts, source)

    return restore_shape(field, single)


def electric_potential_at(position, sources):
    """
    Electric potential ``sum(k q / r)`` of the static point charges.

    Returns
    -------
    torch.Tensor
        Scalar tensor for a single point, shape (n,) for a batch
    """
    pts, single = as_points(position)
    potential = torch.zeros(pts.shape[0], dtype=pts.dtype)

    for source in sources:
        if not isinstance(source, PointCharge):
            continue
        _, dist, valid = _separation(pts, source)
        contribution = COULOMB_CONSTANT * source.strength / dist
        potential = potential + torch.where(
            valid, contribution, torch.zeros_like(contribution)
        )

    return restore_shape(potential, single)


def force_on_charge(position, test_charge, sources, time=0.0):
    """Coulomb force ``q E`` on a test charge."""
    return test_charge * electric_field_at(position, sources, time)


def field_gradient_magnitude(position, sources, delta=0.01, time=0.0):
    """
    Forward-difference rate of change of ``|E|`` along x.

    Used to shade regions of rapidly varying field strength.
    """
    pts, single = as_points(position)
    shifted = pts.clone()
    shifted[:, 0] += delta

    center = torch.linalg.norm(electric_field_at(pts, sources, time), dim=1)
    ahead = torch.linalg.norm(electric_field_at(shifted, sources, time), dim=1)
    gradient = torch.abs((ahead - center) / delta)
    return restore_shape(gradient, single)
