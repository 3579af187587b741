"""Variant auto-discovery and registration.

Scans colorswitch/variants/ for modules that define a `variant` object
of type Variant. Collects them into a dict keyed by name.
"""

import importlib
import pkgutil

from colorswitch.core.types import Variant

_registry: dict[str, Variant] = {}


def discover() -> dict[str, Variant]:
    """Import all variant modules and return the registry."""
    if _registry:
        return _registry

    import colorswitch.variants as pkg

    found_modules = [
        modname for _importer, modname, _ispkg in pkgutil.iter_modules(pkg.__path__) if not modname.startswith('_')
    ]

    for modname in found_modules:
        module = importlib.import_module(f'colorswitch.variants.{modname}')
        var = getattr(module, 'variant', None)
        if isinstance(var, Variant):
            _registry[var.name] = var

    return _registry


def get(name: str) -> Variant:
    """Get a variant by name."""
    reg = discover()
    if name not in reg:
        raise KeyError(f'Unknown variant: {name}. Available: {", ".join(sorted(reg))}')
    return reg[name]


def all_variants() -> dict[str, Variant]:
    """Return all registered variants."""
    return discover()


def image_variants() -> list[Variant]:
    """Variants that write an image, in display order: original first."""
    order = {'original': 0, 'rotated': 1, 'stretch': 2}
    found = [v for v in discover().values() if v.mode is not None]
    return sorted(found, key=lambda v: (order.get(v.name, len(order)), v.name))
