"""
Far-field radiation from antenna sources.

Only the radiation zone is modeled. Within ``FAR_FIELD_FACTOR / k`` of an
antenna the fields are reported as zero rather than as an inaccurate
near-field value, so the output jumps at that radius.
"""

import math

import torch

from ..constants import EPSILON_0, FAR_FIELD_FACTOR, MIN_DISTANCE, SPEED_OF_LIGHT
from ..utils import as_points, restore_shape, vector_math


def wave_number(wave_source):
    """Free-space wave number ``k = 2 pi f / c``"""
    return 2 * math.pi * wave_source.frequency / SPEED_OF_LIGHT


def far_field_distance(wave_source):
    """Distance beyond which the radiation-zone model is evaluated."""
    return FAR_FIELD_FACTOR / wave_number(wave_source)


def dipole_radiation_at(position, wave_source, time=0.0):
    """
    Radiated electric and magnetic fields of an oscillating dipole.

    The second time-derivative of the dipole moment, evaluated at the
    retarded time ``t - r / c``, drives a transverse electric field in the
    plane spanned by the observation direction and the antenna axis. The
    magnetic field follows the plane-wave relation ``B = r_hat x E / c``.

    Parameters
    ----------
    position : array_like
        Sample point (3,) or points (n, 3)
    wave_source : WaveSource
        The radiating antenna
    time : float, default: 0.0
        Observation time in seconds

    Returns
    -------
    electric : torch.Tensor
        Electric field of shape (3,) or (n, 3)
    magnetic : torch.Tensor
        Magnetic flux density of shape (3,) or (n, 3)
    """
    pts, single = as_points(position)

    r = pts - wave_source.location
    dist = torch.linalg.norm(r, dim=1)

    k = wave_number(wave_source)
    omega = wave_source.angular_frequency
    valid = (dist >= MIN_DISTANCE) & (dist > FAR_FIELD_FACTOR / k)
    safe = torch.where(valid, dist, torch.ones_like(dist))

    retarded_time = time - safe / SPEED_OF_LIGHT
    p_ddot = (
        omega**2
        * wave_source.dipole_moment
        * torch.sin(omega * retarded_time + wave_source.phase)
    )

    r_hat = r / safe.unsqueeze(1)
    axis = wave_source.orientation
    cos_theta = vector_math.dot(r_hat, axis)

    # cos(theta) r_hat - axis = sin(theta) theta_hat, which carries the
    # sin(theta) of the radiation pattern without dividing by it
    polar = cos_theta.unsqueeze(1) * r_hat - axis
    factor = k**2 / (4 * math.pi * EPSILON_0 * SPEED_OF_LIGHT**2 * safe)

    electric = (factor * p_ddot).unsqueeze(1) * polar
    magnetic = vector_math.cross(r_hat, electric) / SPEED_OF_LIGHT

    mask = valid.unsqueeze(1)
    electric = torch.where(mask, electric, torch.zeros_like(electric))
    magnetic = torch.where(mask, magnetic, torch.zeros_like(magnetic))

    return restore_shape(electric, single), restore_shape(magnetic, single)


def radiation_fields_at(position, wave_sources, time=0.0):
    """
    Superposed radiation of several antennas.

    Returns
    -------
    electric, magnetic : torch.Tensor
        Summed fields of shape (3,) or (n, 3)
    """
    pts, single = as_points(position)
    electric = torch.zeros_like(pts)
    magnetic = torch.zeros_like(pts)

    for wave_source in wave_sources:
        e, b = dipole_radiation_at(pts, wave_source, time)
        electric = electric + e
        magnetic = magnetic + b

    return restore_shape(electric, single), restore_shape(magnetic, single)
