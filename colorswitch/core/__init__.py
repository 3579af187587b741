"""colorswitch.core — Foundation layer.

Contains the colour transform engine, HSL conversion, image I/O, calibration
chart, configuration and report formatting.
This module has NO dependencies on colorswitch.variants or colorswitch.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
