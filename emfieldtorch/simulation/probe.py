"""
Composite field evaluation.

:func:`probe_fields` runs the whole pipeline for one point: source fields
and antenna radiation are summed, scaled by the local material, combined
with induction from the caller's history and turned into a Poynting vector.
:func:`sample_poynting_field` does the same on a regular lattice for
vector-field displays.
"""

import logging

import torch

from ..utils import as_vector3
from .energy import energy_density, poynting_vector
from .history import FieldSample
from .induction import induced_electric_field, induced_magnetic_field
from .material_coupling import apply_material_effect
from .radiation import radiation_fields_at
from .static import electric_field_at, magnetic_field_at

logger = logging.getLogger(__name__)


def probe_fields(
    position,
    sources,
    wave_sources=(),
    materials=(),
    time=0.0,
    history=None,
    dt=None,
):
    """
    Evaluate all fields at one point.

    Parameters
    ----------
    position : array_like
        Probe location (3,)
    sources : list
        Charges and current sources
    wave_sources : list of WaveSource, optional
        Radiating antennas
    materials : list of Material, optional
        Material volumes in priority order
    time : float, default: 0.0
        Evaluation time
    history : sequence of FieldSample, optional
        Earlier samples at this point, oldest first. Adds induced fields
        when it holds at least two samples.
    dt : float, optional
        Time step for the induction derivative; defaults to the timestamp
        difference of the last two samples.

    Returns
    -------
    FieldSample
    """
    position = as_vector3(position)

    electric = electric_field_at(position, sources, time)
    magnetic = magnetic_field_at(position, sources, time)

    if wave_sources:
        radiated_e, radiated_b = radiation_fields_at(position, wave_sources, time)
        electric = electric + radiated_e
        magnetic = magnetic + radiated_b

    electric = apply_material_effect(electric, "electric", position, materials)
    magnetic = apply_material_effect(magnetic, "magnetic", position, materials)

    if history is not None:
        electric = electric + induced_electric_field(history, dt)
        magnetic = magnetic + induced_magnetic_field(history, dt, materials, position)

    poynting = poynting_vector(electric, magnetic, materials, position)
    return FieldSample(electric, magnetic, poynting, float(time))


def lattice_points(extent=6.0, spacing=1.5):
    """
    Points of a cubic lattice spanning ``[-extent, extent]`` on every axis.

    Returns
    -------
    torch.Tensor
        Points of shape (n, 3)
    """
    axis = torch.arange(-extent, extent + spacing / 2, spacing, dtype=torch.float64)
    X, Y, Z = torch.meshgrid(axis, axis, axis, indexing="ij")
    return torch.stack([X.flatten(), Y.flatten(), Z.flatten()], dim=1)


def sample_poynting_field(
    sources,
    materials=(),
    time=0.0,
    extent=6.0,
    spacing=1.5,
    min_magnitude=1e-8,
):
    """
    Poynting vectors and energy densities on a lattice.

    Only lattice points where ``|S| > min_magnitude`` are returned.

    Returns
    -------
    dict
        ``points`` (m, 3), ``poynting`` (m, 3), ``direction`` (m, 3) unit
        vectors, ``magnitude`` (m,) and ``energy_density`` (m,)
    """
    points = lattice_points(extent, spacing)

    electric = electric_field_at(points, sources, time)
    magnetic = magnetic_field_at(points, sources, time)
    poynting = poynting_vector(electric, magnetic, materials, points)
    magnitude = torch.linalg.norm(poynting, dim=1)
    keep = magnitude > min_magnitude

    density = energy_density(electric[keep], magnetic[keep], materials, points[keep])
    logger.debug(
        "Sampled %d lattice points, %d above %g", points.shape[0], int(keep.sum()), min_magnitude
    )
    return {
        "points": points[keep],
        "poynting": poynting[keep],
        "direction": poynting[keep] / magnitude[keep].unsqueeze(1),
        "magnitude": magnitude[keep],
        "energy_density": density,
    }
