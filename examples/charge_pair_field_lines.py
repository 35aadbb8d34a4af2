import matplotlib.pyplot as plt
import torch

from emfieldtorch.logging_config import setup_logging
from emfieldtorch.simulation import (
    electric_field_at,
    electric_potential_at,
    trace_source_field_lines,
)
from emfieldtorch.validation import default_sources

setup_logging()

# Default scene: +2 at x=-3, -2 at x=3
sources = default_sources()

# Field and potential along the line joining the charges
x = torch.linspace(-2.5, 2.5, 11, dtype=torch.float64)
line = torch.stack([x, torch.zeros_like(x), torch.zeros_like(x)], dim=1)

E = electric_field_at(line, sources)
V = electric_potential_at(line, sources)

for xi, ex, vi in zip(x.tolist(), E[:, 0].tolist(), V.tolist()):
    print(f"x = {xi:5.2f} m   Ex = {ex:11.4e} V/m   V = {vi:11.4e} V")

# Trace field lines starting on rings around each charge
lines = trace_source_field_lines(sources, density=8)

fig, ax = plt.subplots(figsize=(8, 6))
for entry in lines:
    pts = entry["points"].numpy()
    color = "tab:cyan" if entry["strength"] > 0 else "tab:orange"
    ax.plot(pts[:, 0], pts[:, 2], color=color, linewidth=1)

for src in sources:
    ax.scatter(src.location[0], src.location[2], c="k", s=60)

ax.set_xlim(-10, 10)
ax.set_ylim(-10, 10)
ax.set_xlabel("X (m)")
ax.set_ylabel("Z (m)")
ax.set_title("Electric field lines of a charge pair")
ax.set_aspect("equal")
plt.show()
