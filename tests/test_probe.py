"""
Tests for composite probing and lattice sampling.
"""

import torch

from emfieldtorch.constants import COULOMB_CONSTANT
from emfieldtorch.materials import Material, Sphere
from emfieldtorch.simulation import (
    FieldHistory,
    FieldSample,
    dipole_radiation_at,
    induced_electric_field,
    lattice_points,
    probe_fields,
    sample_poynting_field,
)
from emfieldtorch.sources import PointCharge, WaveSource, Wire
from emfieldtorch.validation import default_sources

torch.set_default_dtype(torch.float64)


def test_probe_default_scene():
    sample = probe_fields([0.0, 0.0, 0.0], default_sources(), time=1.5)

    assert isinstance(sample, FieldSample)
    assert sample.timestamp == 1.5
    assert torch.allclose(
        sample.electric, torch.tensor([4 * COULOMB_CONSTANT / 9, 0.0, 0.0])
    )
    assert torch.all(sample.magnetic == 0)
    assert torch.all(sample.poynting == 0)


def test_probe_inside_material():
    sources = default_sources()
    glass = Material(Sphere(1.0), permittivity_r=2.0)
    vacuum = probe_fields([0.0, 0.0, 0.0], sources)
    inside = probe_fields([0.0, 0.0, 0.0], sources, materials=[glass])
    assert torch.allclose(inside.electric, vacuum.electric / 2)


def test_probe_adds_radiation():
    antenna = WaveSource([0.0, 0.0, 0.0], phase=1.0)
    point = [30.0, 0.0, 5.0]
    sample = probe_fields(point, [], wave_sources=[antenna], time=2e-9)
    electric, magnetic = dipole_radiation_at(point, antenna, time=2e-9)

    assert torch.allclose(sample.electric, electric)
    assert torch.allclose(sample.magnetic, magnetic)
    assert torch.linalg.norm(sample.poynting) > 0


def test_probe_with_history():
    sources = [Wire([0.0, 0.0, 0.0], current=1.0)]
    point = [1.0, 0.0, 0.0]

    history = FieldHistory()
    history.append(FieldSample.from_fields([0, 0, 0], [0, 0, 0], [0, 0, 0], 0.0))
    history.append(FieldSample.from_fields([0, 0, 0], [0, 1e-6, 0], [0, 0, 0], 0.1))

    plain = probe_fields(point, sources, time=0.2)
    induced = probe_fields(point, sources, time=0.2, history=history)

    assert torch.allclose(induced.electric - plain.electric, induced_electric_field(history))
    assert torch.allclose(induced.magnetic, plain.magnetic)


def test_lattice_points():
    points = lattice_points(extent=6.0, spacing=1.5)
    assert points.shape == (729, 3)
    assert torch.any(torch.all(points == 0, dim=1))
    assert points.max() == 6.0
    assert points.min() == -6.0


def test_sample_poynting_field():
    sources = [
        Wire([0.0, 0.0, 0.0], current=10.0),
        PointCharge([0.0, 0.0, 2.0], strength=1e-9),
    ]
    flow = sample_poynting_field(sources, extent=4.0, spacing=2.0)

    n = flow["points"].shape[0]
    assert 0 < n < 125
    assert flow["poynting"].shape == (n, 3)
    assert torch.all(flow["magnitude"] > 1e-8)
    assert torch.allclose(torch.linalg.norm(flow["direction"], dim=1), torch.ones(n))
    assert torch.all(flow["energy_density"] >= 0)


def test_sample_poynting_field_static_charges_only():
    flow = sample_poynting_field(default_sources(), extent=2.0, spacing=1.0)
    assert flow["points"].shape == (0, 3)


def test_probe_inside_zero_permeability_material():
    shield = Material(Sphere(1.0), permeability_r=0.0)
    sources = [PointCharge([3.0, 0.0, 0.0], 1.0), Wire([0.0, 0.0, 2.0], current=1.0)]
    sample = probe_fields([0.0, 0.5, 0.0], sources, materials=[shield])

    assert torch.all(torch.isfinite(sample.poynting))
    assert torch.all(sample.poynting == 0)
    assert torch.all(sample.magnetic == 0)


def test_probe_with_repeated_timestamp():
    sources = [Wire([0.0, 0.0, 0.0], current=1.0)]
    history = FieldHistory()
    history.append(FieldSample.from_fields([0, 0, 0], [0, 0, 0], [0, 0, 0], 1.0))
    history.append(FieldSample.from_fields([1, 0, 0], [0, 1e-6, 0], [0, 0, 0], 1.0))

    plain = probe_fields([1.0, 0.0, 0.0], sources, time=1.0)
    repeated = probe_fields([1.0, 0.0, 0.0], sources, time=1.0, history=history)

    assert torch.equal(repeated.electric, plain.electric)
    assert torch.equal(repeated.magnetic, plain.magnetic)
