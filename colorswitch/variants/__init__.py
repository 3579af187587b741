"""Output variants.

Every module in this package that defines a `variant` object is
auto-registered by colorswitch.registry.discover().
"""
