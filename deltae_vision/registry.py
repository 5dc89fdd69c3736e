"""Technique registry.

A technique is any public module in deltae_vision.techniques with a
module-level `technique` attribute holding a Technique. The registry maps
each technique's name to it; that name is also its CLI subcommand.
"""

import importlib
import pkgutil

import deltae_vision.techniques
from deltae_vision.core.types import Technique

_registry: dict[str, Technique] = {}


def _technique_module_names() -> list[str]:
    package = deltae_vision.techniques
    return sorted(
        f'{package.__name__}.{info.name}'
        for info in pkgutil.iter_modules(package.__path__)
        if not info.name.startswith('_')
    )


def discover() -> dict[str, Technique]:
    """Import every technique module once and return name -> Technique."""
    if _registry:
        return _registry

    for modname in _technique_module_names():
        tech = getattr(importlib.import_module(modname), 'technique', None)
        if not isinstance(tech, Technique):
            continue
        if tech.name in _registry:
            raise RuntimeError(f'Technique name {tech.name!r} is defined twice ({modname})')
        _registry[tech.name] = tech

    return _registry


def get(name: str) -> Technique:
    """Look up one technique. Unknown names raise KeyError listing the available ones."""
    reg = discover()
    if name not in reg:
        raise KeyError(f'Unknown technique: {name}. Available: {", ".join(sorted(reg))}')
    return reg[name]


def all_techniques() -> dict[str, Technique]:
    return discover()
