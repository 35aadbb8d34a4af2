"""
Simplified induction coupling.

Faraday and Ampere-Maxwell induction are approximated from the last two
entries of a field history by a backward finite difference scaled with a
scalar coupling constant. There is no spatial curl, so induced magnitudes
are a visual aid and not physically accurate.
"""

import warnings

import torch

from ..constants import INDUCTION_COUPLING
from ..utils import as_vector3
from .history import FieldHistory, FieldSample
from .material_coupling import material_at


def _warn_unphysical():
    warnings.warn(
        f"Induction uses a scalar coupling of {INDUCTION_COUPLING} without "
        "spatial curl; induced magnitudes are not physical.",
        stacklevel=3,
    )


def _entry(item, component):
    """Field and timestamp of a history entry."""
    if isinstance(item, FieldSample):
        return getattr(item, component), item.timestamp
    field, time = item
    return as_vector3(field), float(time)


def _time_derivative(history, component, dt):
    """
    Backward difference of the last two history entries.

    Returns ``None`` when fewer than two entries are available, or when the
    last two share a timestamp and no ``dt`` is given.
    """
    if isinstance(history, FieldHistory):
        history = history.snapshot()
    if len(history) < 2:
        return None

    previous, t_previous = _entry(history[-2], component)
    current, t_current = _entry(history[-1], component)

    if dt is None:
        dt = t_current - t_previous
        if dt == 0:
            return None
    if dt <= 0:
        raise ValueError(f"time step must be positive, got {dt}")

    return (current - previous) / dt


def induced_electric_field(history, dt=None):
    """
    Electric field induced by a changing magnetic field, ``-coupling * dB/dt``.

    Parameters
    ----------
    history : sequence
        :class:`FieldSample` objects (their magnetic field is used) or
        ``(field, time)`` pairs of magnetic field samples, oldest first
    dt : float, optional
        Time step. Defaults to the difference of the last two timestamps.

    Returns
    -------
    torch.Tensor
        Induced field (3,); zero when fewer than two samples are given or
        the last two share a timestamp
    """
    dB_dt = _time_derivative(history, "magnetic", dt)
    if dB_dt is None:
        return torch.zeros(3, dtype=torch.float64)

    _warn_unphysical()
    return -INDUCTION_COUPLING * dB_dt


def induced_magnetic_field(history, dt=None, materials=(), position=(0.0, 0.0, 0.0)):
    """
    Magnetic field induced by a changing electric field, ``coupling * mu * eps * dE/dt``.

    Parameters
    ----------
    history : sequence
        :class:`FieldSample` objects (their electric field is used) or
        ``(field, time)`` pairs of electric field samples, oldest first
    dt : float, optional
        Time step. Defaults to the difference of the last two timestamps.
    materials : list of Material
        Materials used to look up mu and eps at ``position``
    position : array_like
        Point the history was sampled at

    Returns
    -------
    torch.Tensor
        Induced field (3,); zero when fewer than two samples are given or
        the last two share a timestamp
    """
    dE_dt = _time_derivative(history, "electric", dt)
    if dE_dt is None:
        return torch.zeros(3, dtype=torch.float64)

    material = material_at(position, materials)
    displacement = material.permeability * material.permittivity * dE_dt

    _warn_unphysical()
    return INDUCTION_COUPLING * displacement
