"""
Conversion of imported scene data into typed sources and materials.

Scene files store loosely typed dictionaries. The helpers here fill in the
documented defaults for missing fields and build validated objects, so the
solvers only ever see well-formed input.
"""

import logging

from .materials import Box, Cylinder, Material, Sphere
from .sources import (
    InvalidParameter,
    Loop,
    PointCharge,
    Solenoid,
    WaveSource,
    Wire,
)

logger = logging.getLogger(__name__)

SOURCE_DEFAULTS = {
    "type": "charge",
    "position": [0.0, 0.0, 0.0],
    "strength": 1.0,
    "current": 0.0,
    "direction": [0.0, 1.0, 0.0],
    "frequency": 0.0,
    "phase": 0.0,
    "loop_radius": 1.0,
    "solenoid_radius": 0.5,
    "length": 2.0,
    "turns": 50,
}

WAVE_SOURCE_DEFAULTS = {
    "type": "dipole",
    "position": [0.0, 0.0, 0.0],
    "orientation": [0.0, 1.0, 0.0],
    "frequency": 100e6,
    "amplitude": 1.0,
    "phase": 0.0,
    "length": 1.0,
}

MATERIAL_DEFAULTS = {
    "relativePermittivity": 1.0,
    "relativePermeability": 1.0,
    "conductivity": 0.0,
    "position": [0.0, 0.0, 0.0],
}

# Scene-file aliases: 'dipole' charges are point charges, 'current' is a wire
_SOURCE_ALIASES = {"dipole": "charge", "current": "wire"}


def _get(data, key, default, label):
    value = data.get(key)
    if value is None:
        logger.debug("%s: missing %r, using default %r", label, key, default)
        return default
    return value


def source_from_dict(data):
    """
    Build a source from a scene dictionary.

    Parameters
    ----------
    data : dict
        Keys ``type``, ``position``, ``strength``, ``current``, ``direction``,
        ``frequency``, ``phase``, ``radius``, ``length``, ``turns`` and ``id``.
        Missing entries take the values in ``SOURCE_DEFAULTS``.

    Returns
    -------
    PointCharge, Wire, Loop or Solenoid

    Raises
    ------
    InvalidParameter
        For unknown types or values that fail validation
    """
    if not isinstance(data, dict):
        raise InvalidParameter(f"source must be a dict, got {type(data).__name__}")

    kind = _get(data, "type", SOURCE_DEFAULTS["type"], "source")
    kind = _SOURCE_ALIASES.get(kind, kind)
    label = f"{kind} source"
    position = _get(data, "position", SOURCE_DEFAULTS["position"], label)
    identifier = data.get("id")

    if kind == "charge":
        return PointCharge(
            position,
            strength=_get(data, "strength", SOURCE_DEFAULTS["strength"], label),
            frequency=_get(data, "frequency", SOURCE_DEFAULTS["frequency"], label),
            phase=_get(data, "phase", SOURCE_DEFAULTS["phase"], label),
            identifier=identifier,
        )
    if kind == "wire":
        return Wire(
            position,
            current=_get(data, "current", SOURCE_DEFAULTS["current"], label),
            direction=_get(data, "direction", SOURCE_DEFAULTS["direction"], label),
            identifier=identifier,
        )
    if kind == "loop":
        return Loop(
            position,
            radius=_get(data, "radius", SOURCE_DEFAULTS["loop_radius"], label),
            current=_get(data, "current", SOURCE_DEFAULTS["current"], label),
            identifier=identifier,
        )
    if kind == "solenoid":
        return Solenoid(
            position,
            radius=_get(data, "radius", SOURCE_DEFAULTS["solenoid_radius"], label),
            length=_get(data, "length", SOURCE_DEFAULTS["length"], label),
            turns=_get(data, "turns", SOURCE_DEFAULTS["turns"], label),
            current=_get(data, "current", SOURCE_DEFAULTS["current"], label),
            identifier=identifier,
        )
    raise InvalidParameter(f"Unknown source type: {kind!r}")


def wave_source_from_dict(data):
    """
    Build a :class:`WaveSource` from a scene dictionary.

    Missing entries take the values in ``WAVE_SOURCE_DEFAULTS``.
    """
    if not isinstance(data, dict):
        raise InvalidParameter(f"wave source must be a dict, got {type(data).__name__}")

    label = "wave source"
    return WaveSource(
        _get(data, "position", WAVE_SOURCE_DEFAULTS["position"], label),
        frequency=_get(data, "frequency", WAVE_SOURCE_DEFAULTS["frequency"], label),
        amplitude=_get(data, "amplitude", WAVE_SOURCE_DEFAULTS["amplitude"], label),
        phase=_get(data, "phase", WAVE_SOURCE_DEFAULTS["phase"], label),
        orientation=_get(
            data, "orientation", WAVE_SOURCE_DEFAULTS["orientation"], label
        ),
        length=_get(data, "length", WAVE_SOURCE_DEFAULTS["length"], label),
        antenna_type=_get(data, "type", WAVE_SOURCE_DEFAULTS["type"], label),
        identifier=data.get("id"),
    )


def geometry_from_dict(data):
    """
    Build a geometry from ``{"type": ..., "dimensions": [...]}``.

    ``dimensions`` is ``[radius]`` for spheres, ``[width, height, depth]`` for
    boxes and ``[radius, height]`` for cylinders.
    """
    kind = data.get("type")
    dimensions = list(data.get("dimensions") or [])

    try:
        if kind == "sphere":
            return Sphere(dimensions[0])
        if kind == "box":
            return Box(*dimensions[:3])
        if kind == "cylinder":
            return Cylinder(*dimensions[:2])
    except (IndexError, TypeError) as e:
        raise InvalidParameter(
            f"Incomplete dimensions {dimensions!r} for {kind!r} geometry"
        ) from e
    raise InvalidParameter(f"Unknown geometry type: {kind!r}")


def material_from_dict(data):
    """
    Build a :class:`Material` from a scene dictionary.

    Expects a ``geometry`` entry with ``type``, ``position`` and ``dimensions``.
    Missing electromagnetic properties take the values in ``MATERIAL_DEFAULTS``.
    """
    if not isinstance(data, dict):
        raise InvalidParameter(f"material must be a dict, got {type(data).__name__}")

    geometry_data = data.get("geometry")
    if not isinstance(geometry_data, dict):
        raise InvalidParameter("material requires a geometry dict")

    label = f"material {data.get('name', '')}".strip()
    return Material(
        geometry_from_dict(geometry_data),
        location=_get(geometry_data, "position", MATERIAL_DEFAULTS["position"], label),
        permittivity_r=_get(
            data,
            "relativePermittivity",
            MATERIAL_DEFAULTS["relativePermittivity"],
            label,
        ),
        permeability_r=_get(
            data,
            "relativePermeability",
            MATERIAL_DEFAULTS["relativePermeability"],
            label,
        ),
        conductivity=_get(data, "conductivity", MATERIAL_DEFAULTS["conductivity"], label),
        name=data.get("name"),
        identifier=data.get("id"),
    )


def default_sources():
    """The starting scene: charges of +2 and -2 at x = -3 and x = 3."""
    return [
        PointCharge([-3.0, 0.0, 0.0], strength=2.0, identifier="default-1"),
        PointCharge([3.0, 0.0, 0.0], strength=-2.0, identifier="default-2"),
    ]


def scene_from_dict(data):
    """
    Convert an imported scene into typed objects.

    Parameters
    ----------
    data : dict
        Scene with optional ``sources``, ``waveSources`` and ``materials`` lists

    Returns
    -------
    sources, wave_sources, materials : list
        Typed objects; ``sources`` falls back to :func:`default_sources` when
        the scene has no source list.
    """
    if not isinstance(data, dict):
        raise InvalidParameter(f"scene must be a dict, got {type(data).__name__}")

    raw_sources = data.get("sources")
    if isinstance(raw_sources, list):
        sources = [source_from_dict(item) for item in raw_sources]
    else:
        logger.info("Scene has no source list, using the default scene")
        sources = default_sources()

    wave_sources = [wave_source_from_dict(item) for item in data.get("waveSources") or []]
    materials = [material_from_dict(item) for item in data.get("materials") or []]

    logger.info(
        "Imported scene with %d sources, %d antennas and %d materials",
        len(sources),
        len(wave_sources),
        len(materials),
    )
    return sources, wave_sources, materials
