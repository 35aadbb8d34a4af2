"""
Tests for the Poynting vector and energy density.
"""

import pytest
import torch

from emfieldtorch.constants import EPSILON_0, MU_0
from emfieldtorch.materials import Box, Material
from emfieldtorch.simulation import energy_density, poynting_vector

torch.set_default_dtype(torch.float64)


@pytest.fixture
def magnetic_block():
    return Material(Box(2.0, 2.0, 2.0), permeability_r=2.0, permittivity_r=3.0)


def test_poynting_vacuum():
    S = poynting_vector(torch.tensor([1.0, 0.0, 0.0]), torch.tensor([0.0, 1.0, 0.0]))
    assert torch.allclose(S, torch.tensor([0.0, 0.0, 1 / MU_0]))


def test_poynting_parallel_fields():
    S = poynting_vector(torch.tensor([1.0, 2.0, 3.0]), torch.tensor([2.0, 4.0, 6.0]))
    assert torch.all(S == 0)


def test_poynting_in_material(magnetic_block):
    E = torch.tensor([1.0, 0.0, 0.0])
    B = torch.tensor([0.0, 1.0, 0.0])
    vacuum = poynting_vector(E, B)
    inside = poynting_vector(E, B, [magnetic_block], [0.0, 0.0, 0.0])
    outside = poynting_vector(E, B, [magnetic_block], [5.0, 0.0, 0.0])

    assert torch.allclose(inside, vacuum / 2)
    assert torch.allclose(outside, vacuum)

    # Material ignored without a position
    assert torch.allclose(poynting_vector(E, B, [magnetic_block]), vacuum)


def test_energy_density_vacuum():
    electric_only = energy_density(torch.tensor([1.0, 0.0, 0.0]), torch.zeros(3))
    assert electric_only.item() == pytest.approx(0.5 * EPSILON_0)

    magnetic_only = energy_density(torch.zeros(3), torch.tensor([0.0, 0.0, 1.0]))
    assert magnetic_only.item() == pytest.approx(0.5 / MU_0)


def test_energy_density_in_material(magnetic_block):
    E = torch.tensor([1.0, 0.0, 0.0])
    B = torch.tensor([0.0, 0.0, 1.0])
    density = energy_density(E, B, [magnetic_block], [0.5, 0.5, 0.5])
    expected = 0.5 * (3 * EPSILON_0 + 1 / (2 * MU_0))
    assert density.item() == pytest.approx(expected)


def test_energy_density_non_negative(magnetic_block):
    generator = torch.Generator().manual_seed(7)
    E = torch.randn(200, 3, generator=generator) * 1e3
    B = torch.randn(200, 3, generator=generator) * 1e-3
    points = torch.randn(200, 3, generator=generator)

    assert torch.all(energy_density(E, B) >= 0)
    assert torch.all(energy_density(E, B, [magnetic_block], points) >= 0)


def test_batched_shapes(magnetic_block):
    E = torch.ones(5, 3)
    B = torch.ones(5, 3) * torch.tensor([1.0, -1.0, 0.5])
    points = torch.tensor(
        [[0.0, 0.0, 0.0], [3.0, 0.0, 0.0], [0.9, 0.9, 0.9], [0.0, 2.0, 0.0], [1.0, 1.0, 1.0]]
    )

    S = poynting_vector(E, B, [magnetic_block], points)
    density = energy_density(E, B, [magnetic_block], points)
    assert S.shape == (5, 3)
    assert density.shape == (5,)
    assert torch.allclose(S[0], S[1] / 2)
    assert torch.allclose(S[1], S[3])


def test_zero_permeability_stays_finite():
    shield = Material(Box(2.0, 2.0, 2.0), permeability_r=0.0)
    E = torch.tensor([1.0, 0.0, 0.0])
    B = torch.tensor([0.0, 1.0, 0.0])

    S = poynting_vector(E, B, [shield], [0.0, 0.5, 0.0])
    assert torch.all(S == 0)

    density = energy_density(E, B, [shield], [0.0, 0.5, 0.0])
    assert density.item() == pytest.approx(0.5 * EPSILON_0)

    points = torch.tensor([[0.0, 0.5, 0.0], [4.0, 0.0, 0.0]])
    S = poynting_vector(E.expand(2, 3), B.expand(2, 3), [shield], points)
    assert torch.all(torch.isfinite(S))
    assert torch.all(S[0] == 0)
    assert torch.allclose(S[1], torch.tensor([0.0, 0.0, 1 / MU_0]))
