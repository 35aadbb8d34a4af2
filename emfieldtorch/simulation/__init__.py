"""
Field solvers for emfieldtorch.

Static fields
    electric_field_at, magnetic_field_at, electric_potential_at,
    force_on_charge, field_gradient_magnitude

Radiation
    dipole_radiation_at, radiation_fields_at

Materials
    material_at, material_properties_at, apply_material_effect,
    wave_impedance, wave_velocity

Induction
    FieldSample, FieldHistory, induced_electric_field, induced_magnetic_field

Energy flow
    poynting_vector, energy_density

Field lines
    trace_field_line, trace_electric_field_line, trace_magnetic_field_line,
    electric_seed_points, magnetic_seed_points, trace_source_field_lines

Probing
    probe_fields, lattice_points, sample_poynting_field

Usage
-----
    >>> from emfieldtorch.sources import PointCharge
    >>> from emfieldtorch.simulation import electric_field_at
    >>> sources = [PointCharge([-2, 0, 0], 2.0), PointCharge([2, 0, 0], -2.0)]
    >>> E = electric_field_at([0.0, 0.0, 0.0], sources)
"""

from .static import (
    electric_field_at,
    magnetic_field_at,
    electric_potential_at,
    force_on_charge,
    field_gradient_magnitude,
)
from .radiation import dipole_radiation_at, radiation_fields_at, wave_number
from .material_coupling import (
    material_at,
    material_properties_at,
    apply_material_effect,
    wave_impedance,
    wave_velocity,
)
from .history import FieldSample, FieldHistory
from .induction import induced_electric_field, induced_magnetic_field
from .energy import poynting_vector, energy_density
from .field_lines import (
    trace_field_line,
    trace_electric_field_line,
    trace_magnetic_field_line,
    electric_seed_points,
    magnetic_seed_points,
    trace_source_field_lines,
)
from .probe import probe_fields, lattice_points, sample_poynting_field

__all__ = [
    # Static fields
    "electric_field_at",
    "magnetic_field_at",
    "electric_potential_at",
    "force_on_charge",
    "field_gradient_magnitude",
    # Radiation
    "dipole_radiation_at",
    "radiation_fields_at",
    "wave_number",
    # Materials
    "material_at",
    "material_properties_at",
    "apply_material_effect",
    "wave_impedance",
    "wave_velocity",
    # Induction
    "FieldSample",
    "FieldHistory",
    "induced_electric_field",
    "induced_magnetic_field",
    # Energy flow
    "poynting_vector",
    "energy_density",
    # Field lines
    "trace_field_line",
    "trace_electric_field_line",
    "trace_magnetic_field_line",
    "electric_seed_points",
    "magnetic_seed_points",
    "trace_source_field_lines",
    # Probing
    "probe_fields",
    "lattice_points",
    "sample_poynting_field",
]
