"""colorswitch — hue rotation and hue stretch of images, per pixel."""

from colorswitch.core.engine import (
    BufferShapeError,
    apply_hue_stretch,
    apply_identity,
    apply_rotate_saturate,
    stretch_hue,
    transform,
)
from colorswitch.core.types import TransformMode

__all__ = [
    'BufferShapeError',
    'TransformMode',
    'apply_hue_stretch',
    'apply_identity',
    'apply_rotate_saturate',
    'stretch_hue',
    'transform',
]
