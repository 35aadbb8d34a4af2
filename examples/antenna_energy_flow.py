import torch

from emfieldtorch import Material, PointCharge, Sphere, WaveSource, Wire
from emfieldtorch.logging_config import setup_logging
from emfieldtorch.simulation import (
    FieldHistory,
    probe_fields,
    sample_poynting_field,
    wave_impedance,
    wave_velocity,
)
from emfieldtorch.simulation.radiation import far_field_distance

setup_logging()

antenna = WaveSource([0.0, 0.0, 0.0], frequency=100e6, orientation=[0.0, 1.0, 0.0])
wire = Wire([0.0, 0.0, -2.0], current=5.0)
glass = Material(Sphere(1.5), location=[8.0, 0.0, 0.0], permittivity_r=4.0, name="Glass")

print(f"Far-field radiation starts at {far_field_distance(antenna):.2f} m")
print(f"Glass impedance {wave_impedance(glass):.1f} Ohm, velocity {wave_velocity(glass):.3e} m/s")

# Step a probe through two radiation periods and keep a rolling history
probe = torch.tensor([8.0, 0.0, 0.0], dtype=torch.float64)
history = FieldHistory()
dt = 1.0 / antenna.frequency / 20

for step in range(40):
    sample = probe_fields(
        probe,
        [wire],
        wave_sources=[antenna],
        materials=[glass],
        time=step * dt,
        history=history.snapshot(),
        dt=dt,
    )
    history.append(sample)

latest = history.latest
print(f"t = {latest.timestamp:.3e} s")
print(f"  E = {latest.electric.tolist()}")
print(f"  B = {latest.magnetic.tolist()}")
print(f"  S = {latest.poynting.tolist()}")

# Energy flow around the wire and a small charge on a coarse lattice
charge = PointCharge([0.0, 0.0, 2.0], strength=1e-9)
flow = sample_poynting_field(
    [wire, charge], materials=[glass], extent=4.0, spacing=2.0
)
print(f"{flow['points'].shape[0]} lattice points carry energy flux")
