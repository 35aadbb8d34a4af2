"""
Field-line tracing.

Lines are integrated with fixed-length Euler steps along the normalized
field. Around a straight wire the tracer instead walks the circle of the
starting radius and closes the polyline once it comes back to the start.
"""

import logging
import math

import torch

from ..constants import (
    ELECTRIC_LINE_BOUND,
    ELECTRIC_LINE_THRESHOLD,
    LOOP_CLOSURE_MIN_STEPS,
    MAGNETIC_LINE_BOUND,
    MAGNETIC_LINE_THRESHOLD,
)
from ..sources import ELECTRIC_SOURCE_TYPES, MAGNETIC_SOURCE_TYPES, Loop, Wire
from ..utils import as_vector3, vector_math
from .static import electric_field_at, magnetic_field_at

logger = logging.getLogger(__name__)


def _wire_radius(point, wire):
    """Distance of ``point`` from the wire axis."""
    offset = point - wire.location
    along = torch.dot(offset, vector_math.normalize(wire.direction))
    return math.sqrt(max(torch.dot(offset, offset).item() - along.item() ** 2, 0.0))


def _lap_steps(start, wire, step_size):
    """Steps needed to walk once around ``wire`` at the radius of ``start``."""
    radius = _wire_radius(start, wire)
    if radius == 0:
        return 0
    return math.ceil(2 * math.pi / math.atan(step_size / radius)) + 1


def _wire_step(position, wire, radius, step_size):
    """
    Tangential step around ``wire``, kept on the circle of ``radius``.

    Returns ``None`` on the wire axis, where the tangent is undefined.
    """
    offset = position - wire.location
    tangent = vector_math.cross(wire.direction, offset)
    if torch.linalg.norm(tangent) == 0:
        return None
    moved = position + vector_math.normalize(tangent) * step_size

    # Project back onto the starting circle so the line does not spiral out
    axis = vector_math.normalize(wire.direction)
    offset = moved - wire.location
    along = torch.dot(offset, axis) * axis
    radial = offset - along
    return wire.location + along + vector_math.normalize(radial) * radius


def trace_field_line(
    start,
    field_fn,
    step_size=0.1,
    max_steps=1000,
    threshold=ELECTRIC_LINE_THRESHOLD,
    bound_radius=ELECTRIC_LINE_BOUND,
    reverse=False,
    wire=None,
):
    """
    Integrate a line through a vector field.

    At every step the current point is recorded and the field evaluated.
    Tracing stops when the field magnitude drops below ``threshold``, when
    the point leaves the sphere of ``bound_radius`` around the origin, or
    after ``max_steps`` steps.

    Parameters
    ----------
    start : array_like
        Starting point (3,)
    field_fn : callable
        Maps a point of shape (3,) to a field vector of shape (3,)
    step_size : float, default: 0.1
        Length of every step
    max_steps : int, default: 1000
        Maximum number of steps
    threshold : float
        Field magnitude below which tracing stops
    bound_radius : float
        Distance from the origin beyond which tracing stops
    reverse : bool, default: False
        Step against the field, e.g. when tracing away from a negative charge
    wire : Wire, optional
        Trace the closed circle around this wire instead of following the
        field direction. The start point is appended again on closure.

    Returns
    -------
    torch.Tensor
        Polyline of shape (n_points, 3)
    """
    if step_size <= 0:
        raise ValueError(f"step_size must be positive, got {step_size}")

    start = as_vector3(start)
    position = start.clone()
    points = []
    sign = -1.0 if reverse else 1.0
    reason = "max_steps"

    radius = _wire_radius(start, wire) if wire is not None else None

    for step in range(max_steps):
        points.append(position.clone())

        field = field_fn(position)
        if torch.linalg.norm(field) < threshold:
            reason = "weak field"
            break

        if wire is not None:
            moved = _wire_step(position, wire, radius, step_size)
            if moved is None:
                reason = "on wire axis"
                break
            position = moved

            if (
                step > LOOP_CLOSURE_MIN_STEPS
                and torch.linalg.norm(position - start) < 2 * step_size
            ):
                points.append(start.clone())
                reason = "closed loop"
                break
        else:
            position = position + sign * vector_math.normalize(field) * step_size

        if torch.linalg.norm(position) > bound_radius:
            reason = "out of bounds"
            break

    logger.debug("Field line stopped after %d points: %s", len(points), reason)
    return torch.stack(points)


def trace_electric_field_line(
    start, sources, step_size=0.1, max_steps=1000, reverse=False, time=0.0
):
    """
    Electric field line from ``start``.

    Stops below ``ELECTRIC_LINE_THRESHOLD`` or beyond ``ELECTRIC_LINE_BOUND``.
    """
    return trace_field_line(
        start,
        lambda p: electric_field_at(p, sources, time),
        step_size=step_size,
        max_steps=max_steps,
        threshold=ELECTRIC_LINE_THRESHOLD,
        bound_radius=ELECTRIC_LINE_BOUND,
        reverse=reverse,
    )


def trace_magnetic_field_line(start, sources, step_size=0.1, max_steps=500, wire=None):
    """
    Magnetic field line from ``start``.

    Stops below ``MAGNETIC_LINE_THRESHOLD`` or beyond ``MAGNETIC_LINE_BOUND``.
    Pass ``wire`` to trace a closed circle around a straight wire; the step
    budget is then raised to at least one full lap so large rings still close.
    """
    if wire is not None and step_size > 0:
        start = as_vector3(start)
        max_steps = max(max_steps, _lap_steps(start, wire, step_size))

    return trace_field_line(
        start,
        lambda p: magnetic_field_at(p, sources),
        step_size=step_size,
        max_steps=max_steps,
        threshold=MAGNETIC_LINE_THRESHOLD,
        bound_radius=MAGNETIC_LINE_BOUND,
        wire=wire,
    )


def electric_seed_points(charge, density=8, radius=0.2):
    """
    Starting points on a ring in the xz-plane around a point charge.

    The number of seeds is ``int(|strength| * density)``.

    Returns
    -------
    torch.Tensor
        Seeds of shape (n_seeds, 3)
    """
    n_lines = int(abs(charge.strength) * density)
    angles = torch.arange(n_lines, dtype=torch.float64) * (2 * math.pi / max(n_lines, 1))
    offsets = torch.stack(
        [radius * torch.cos(angles), torch.zeros_like(angles), radius * torch.sin(angles)],
        dim=1,
    )
    return charge.location + offsets


def magnetic_seed_points(source, density=8, generator=None):
    """
    Starting points for the magnetic field lines of one current source.

    Wires get rings of growing radius, loops get points just above and
    below the loop near its axis, solenoids get points near the axis at
    random heights drawn from ``generator``.

    Returns
    -------
    torch.Tensor
        Seeds of shape (n_seeds, 3)
    """
    n_lines = int(abs(source.current) * density)
    angles = torch.arange(n_lines, dtype=torch.float64) * (2 * math.pi / max(n_lines, 1))
    index = torch.arange(n_lines, dtype=torch.float64)

    if isinstance(source, Wire):
        radii = 0.5 + 0.2 * index
        heights = torch.zeros_like(angles)
    elif isinstance(source, Loop):
        radii = torch.full_like(angles, 0.1 * source.radius)
        heights = torch.where(
            index % 2 == 0, torch.full_like(index, 0.1), torch.full_like(index, -0.1)
        )
    else:
        radii = torch.full_like(angles, 0.2)
        uniform = torch.rand(n_lines, generator=generator, dtype=torch.float64)
        heights = (uniform - 0.5) * source.length

    offsets = torch.stack(
        [radii * torch.cos(angles), heights, radii * torch.sin(angles)], dim=1
    )
    return source.location + offsets


def trace_source_field_lines(sources, density=8, step_size=0.1, generator=None):
    """
    Trace the field lines of every source in a scene.

    Electric lines start around each charge and run away from positive and
    towards negative charges. Magnetic lines start from
    :func:`magnetic_seed_points`; lines around wires are closed circles.

    Returns
    -------
    list of dict
        One entry per line with keys ``points`` (n, 3), ``strength`` and ``kind``
    """
    lines = []

    for charge in sources:
        if not isinstance(charge, ELECTRIC_SOURCE_TYPES):
            continue
        for seed in electric_seed_points(charge, density):
            points = trace_electric_field_line(
                seed, sources, step_size=step_size, reverse=charge.strength < 0
            )
            lines.append({"points": points, "strength": charge.strength, "kind": "charge"})

    magnetic_sources = [s for s in sources if isinstance(s, MAGNETIC_SOURCE_TYPES)]
    for source in magnetic_sources:
        wire = source if isinstance(source, Wire) else None
        for seed in magnetic_seed_points(source, density, generator=generator):
            points = trace_magnetic_field_line(
                seed, magnetic_sources, step_size=step_size, wire=wire
            )
            if points.shape[0] > 1:
                kind = type(source).__name__.lower()
                lines.append({"points": points, "strength": source.current, "kind": kind})

    logger.debug("Traced %d field lines", len(lines))
    return lines
