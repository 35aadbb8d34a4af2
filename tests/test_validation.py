"""
Tests for converting imported scene dictionaries into typed objects.
"""

import pytest
import torch

from emfieldtorch.materials import Box, Cylinder, Sphere
from emfieldtorch.sources import (
    InvalidParameter,
    Loop,
    PointCharge,
    Solenoid,
    WaveSource,
    Wire,
)
from emfieldtorch.validation import (
    default_sources,
    material_from_dict,
    scene_from_dict,
    source_from_dict,
    wave_source_from_dict,
)


class TestSourceFromDict:
    def test_missing_type_is_charge(self):
        src = source_from_dict({"position": [1.0, 2.0, 3.0]})
        assert isinstance(src, PointCharge)
        assert src.strength == 1.0
        assert torch.allclose(src.location, torch.tensor([1.0, 2.0, 3.0], dtype=torch.float64))

    def test_empty_dict_uses_defaults(self):
        src = source_from_dict({})
        assert isinstance(src, PointCharge)
        assert torch.all(src.location == 0)
        assert src.frequency == 0.0

    def test_solenoid_defaults(self):
        src = source_from_dict({"type": "solenoid", "current": 2.0})
        assert isinstance(src, Solenoid)
        assert src.radius == 0.5
        assert src.length == 2.0
        assert src.turns == 50
        assert src.current == 2.0

    def test_loop_default_radius(self):
        src = source_from_dict({"type": "loop"})
        assert isinstance(src, Loop)
        assert src.radius == 1.0
        assert src.current == 0.0

    def test_aliases(self):
        assert isinstance(source_from_dict({"type": "current"}), Wire)
        assert isinstance(source_from_dict({"type": "dipole", "strength": 2}), PointCharge)

    def test_wire_direction(self):
        src = source_from_dict({"type": "wire", "direction": [1, 0, 0], "current": -3})
        assert torch.allclose(src.direction, torch.tensor([1.0, 0.0, 0.0], dtype=torch.float64))
        assert src.current == -3.0

    def test_identifier_kept(self):
        src = source_from_dict({"id": "abc", "type": "charge"})
        assert src.identifier == "abc"

    def test_unknown_type(self):
        with pytest.raises(InvalidParameter):
            source_from_dict({"type": "magnet"})

    def test_malformed_values(self):
        with pytest.raises(InvalidParameter):
            source_from_dict({"position": [float("nan"), 0, 0]})
        with pytest.raises(InvalidParameter):
            source_from_dict({"type": "solenoid", "turns": -3})
        with pytest.raises(InvalidParameter):
            source_from_dict(["charge"])


class TestWaveSourceFromDict:
    def test_defaults(self):
        antenna = wave_source_from_dict({})
        assert isinstance(antenna, WaveSource)
        assert antenna.frequency == 100e6
        assert antenna.amplitude == 1.0
        assert antenna.length == 1.0
        assert antenna.antenna_type == "dipole"

    def test_fields(self):
        antenna = wave_source_from_dict(
            {"type": "loop", "frequency": 5e6, "orientation": [0, 0, 2], "phase": 1.0}
        )
        assert antenna.antenna_type == "loop"
        assert antenna.phase == 1.0
        assert torch.allclose(
            antenna.orientation, torch.tensor([0.0, 0.0, 1.0], dtype=torch.float64)
        )

    def test_zero_frequency(self):
        with pytest.raises(InvalidParameter):
            wave_source_from_dict({"frequency": 0})


class TestMaterialFromDict:
    def test_box(self):
        material = material_from_dict(
            {
                "name": "Ferrite",
                "relativePermeability": 1000,
                "geometry": {
                    "type": "box",
                    "position": [1, 0, 0],
                    "dimensions": [2, 2, 2],
                },
            }
        )
        assert isinstance(material.geometry, Box)
        assert material.permeability_r == 1000
        assert material.permittivity_r == 1.0
        assert material.conductivity == 0.0
        assert material.name == "Ferrite"

    def test_sphere_and_cylinder(self):
        sphere = material_from_dict({"geometry": {"type": "sphere", "dimensions": [2, 0, 0]}})
        assert isinstance(sphere.geometry, Sphere)
        assert sphere.geometry.radius == 2

        cylinder = material_from_dict(
            {"geometry": {"type": "cylinder", "dimensions": [1, 3, 0]}}
        )
        assert isinstance(cylinder.geometry, Cylinder)
        assert cylinder.geometry.height == 3

    def test_invalid(self):
        with pytest.raises(InvalidParameter):
            material_from_dict({"relativePermittivity": 2})
        with pytest.raises(InvalidParameter):
            material_from_dict({"geometry": {"type": "cone", "dimensions": [1]}})
        with pytest.raises(InvalidParameter):
            material_from_dict({"geometry": {"type": "box", "dimensions": [1]}})
        with pytest.raises(InvalidParameter):
            material_from_dict(
                {"relativePermittivity": 0.5, "geometry": {"type": "sphere", "dimensions": [1]}}
            )


class TestSceneFromDict:
    def test_default_scene(self):
        sources, wave_sources, materials = scene_from_dict({})
        assert len(sources) == 2
        assert wave_sources == []
        assert materials == []
        assert [s.strength for s in sources] == [2.0, -2.0]

    def test_full_scene(self):
        scene = {
            "sources": [{"type": "wire", "current": 1.0}, {"strength": -1.0}],
            "waveSources": [{"frequency": 1e8}],
            "materials": [{"geometry": {"type": "sphere", "dimensions": [1]}}],
        }
        sources, wave_sources, materials = scene_from_dict(scene)
        assert isinstance(sources[0], Wire)
        assert isinstance(sources[1], PointCharge)
        assert len(wave_sources) == 1
        assert len(materials) == 1

    def test_default_sources(self):
        sources = default_sources()
        assert torch.allclose(
            sources[0].location, torch.tensor([-3.0, 0.0, 0.0], dtype=torch.float64)
        )
        assert sources[1].strength == -2.0
