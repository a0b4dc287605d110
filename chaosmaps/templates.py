"""
Combined map template registry and cached map builds.
"""

from .maps_scalar import MAPS_SCALAR
from .maps_planar import MAPS_PLANAR
from .maps_torus import MAPS_TORUS
from .map_functions import build_map as _build_map_impl

# Combine all map templates into a single dict
MAP_TEMPLATES: dict[str, dict] = {}
MAP_TEMPLATES.update(MAPS_SCALAR)
MAP_TEMPLATES.update(MAPS_PLANAR)
MAP_TEMPLATES.update(MAPS_TORUS)

_BUILT: dict[str, dict] = {}


def build_map(name: str) -> dict:
    """
    Build a map configuration from a template.

    Compiled configurations are cached per name; callers must not mutate
    the returned dict (use params_for() to get an owned params array).

    Args:
        name: Map name from MAP_TEMPLATES

    Returns:
        dict with compiled step/deriv functions and configuration
    """
    if name not in _BUILT:
        _BUILT[name] = _build_map_impl(name, MAP_TEMPLATES)
    return _BUILT[name]
