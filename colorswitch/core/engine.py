"""Per-pixel colour transforms over raw RGBA8 buffers.

Three modes share one pipeline:

  IDENTITY         copy of the input
  ROTATE_SATURATE  hue + 180 degrees, saturation x4
  HUE_STRETCH      hue pushed away from a reference point at 216 degrees,
                   saturation x4

Samples are treated as sRGB-encoded and converted to HSL straight from the
normalized 8-bit values, with no gamma decoding first. This is a perceptual
choice: it reproduces the "Color Rotation" and "Saturation" sliders of the
FIJI Color Inspector 3D plugin used for manual colour switching of stained
micrographs. It is not a colorimetric operation.

Saturation is clamped to [0, 1] after the x4 boost unless clamp_saturation
is False, in which case the HSL reconstruction overshoots and the final
8-bit cast clips each channel. Alpha is never modified.

Inputs are never mutated; every operation returns a new buffer.
"""

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from colorswitch.core.hsl import hsl_to_rgb, rgb_to_hsl
from colorswitch.core.types import TransformMode

SATURATION_FACTOR = 4.0
ROTATION_DEGREES = 180.0

# Pixels converted to float per step; bounds peak memory on large images
CHUNK_PIXELS = 1 << 18

# Hue stretch reference point, as a fraction of a full turn and a radius
CENTER_HUE = 0.6
STRETCH_RADIUS = 0.8

_CX = STRETCH_RADIUS * math.cos(2.0 * math.pi * CENTER_HUE)
_CY = STRETCH_RADIUS * math.sin(2.0 * math.pi * CENTER_HUE)


class BufferShapeError(ValueError):
    """Raised when a pixel buffer is not a whole number of RGBA8 pixels."""


def _as_pixels(buffer, width: int | None = None, height: int | None = None) -> np.ndarray:
    """View buffer as an (N, 4) uint8 array. Raises BufferShapeError on bad shape."""
    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8:
            raise BufferShapeError(f'pixel array must be uint8, got {buffer.dtype}')
        flat = buffer.reshape(-1)
    elif memoryview(buffer).nbytes == 0:
        flat = np.empty(0, dtype=np.uint8)
    else:
        flat = np.frombuffer(buffer, dtype=np.uint8)

    if flat.size % 4 != 0:
        raise BufferShapeError(f'buffer length {flat.size} is not a multiple of 4')
    if width is not None or height is not None:
        if width is None or height is None:
            raise BufferShapeError('width and height must be given together')
        expected = 4 * width * height
        if flat.size != expected:
            raise BufferShapeError(f'buffer length {flat.size} does not match {width}x{height} RGBA ({expected} bytes)')
    return flat.reshape(-1, 4)


def _like_input(buffer, pixels: np.ndarray):
    """Return pixels in the same container type as the caller passed in."""
    if isinstance(buffer, np.ndarray):
        return pixels.reshape(buffer.shape)
    return pixels.tobytes()


def _to_u8(rgb: np.ndarray) -> np.ndarray:
    """Round to nearest and saturate into [0, 255]."""
    return np.clip(np.floor(rgb * 255.0 + 0.5), 0, 255).astype(np.uint8)


def stretch_hue(hue_degrees):
    """Map hue angle(s) in degrees through the stretch around CENTER_HUE.

    The hue is placed on the unit circle and re-measured from the reference
    point (_CX, _CY), which sits inside the circle at radius STRETCH_RADIUS.
    Hues near the reference are spread apart; the hue on the reference ray
    and its opposite are fixed points. Returns degrees in [0, 360).
    """
    theta = np.radians(hue_degrees)
    dx = np.cos(theta) - _CX
    dy = np.sin(theta) - _CY
    return np.degrees(np.arctan2(dy, dx)) % 360.0


def _edit_hsl(pixels: np.ndarray, mode: TransformMode, clamp_saturation: bool) -> np.ndarray:
    rgb = pixels[:, :3].astype(np.float64) / 255.0
    hue, saturation, lightness = rgb_to_hsl(rgb)

    if mode is TransformMode.ROTATE_SATURATE:
        hue = (hue + ROTATION_DEGREES) % 360.0
    elif mode is TransformMode.HUE_STRETCH:
        hue = stretch_hue(hue)
    else:
        raise ValueError(f'Not an HSL edit mode: {mode}')

    saturation = saturation * SATURATION_FACTOR
    if clamp_saturation:
        saturation = np.clip(saturation, 0.0, 1.0)

    out = pixels.copy()
    out[:, :3] = _to_u8(hsl_to_rgb(hue, saturation, lightness))
    return out


def _run_chunked(pixels: np.ndarray, mode: TransformMode, clamp_saturation: bool, max_workers: int) -> np.ndarray:
    """Edit contiguous chunks of at most CHUNK_PIXELS pixels into one output array.

    Peak float64 memory is bounded by the chunk size times the number of
    workers, not by the image size.
    """
    n = len(pixels)
    step = max(1, min(CHUNK_PIXELS, -(-n // max_workers)))
    out = np.empty_like(pixels)

    def edit(start: int) -> None:
        stop = min(start + step, n)
        out[start:stop] = _edit_hsl(pixels[start:stop], mode, clamp_saturation)

    starts = range(0, n, step)
    if max_workers == 1:
        for start in starts:
            edit(start)
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            list(pool.map(edit, starts))
    return out


def transform(
    buffer,
    mode: TransformMode,
    *,
    width: int | None = None,
    height: int | None = None,
    clamp_saturation: bool = True,
    max_workers: int = 1,
):
    """Apply mode to an RGBA8 buffer and return a new buffer of the same length.

    buffer may be bytes-like or a uint8 numpy array of any shape; the result
    is bytes or an array of the same shape respectively. When width and
    height are given the buffer must hold exactly width*height pixels.
    """
    if max_workers < 1:
        raise ValueError(f'max_workers must be >= 1, got {max_workers}')
    pixels = _as_pixels(buffer, width, height)

    if mode is TransformMode.IDENTITY:
        out = pixels.copy()
    elif mode in (TransformMode.ROTATE_SATURATE, TransformMode.HUE_STRETCH):
        out = _run_chunked(pixels, mode, clamp_saturation, max_workers)
    else:
        raise ValueError(f'Unknown transform mode: {mode!r}')

    return _like_input(buffer, out)


def apply_identity(buffer):
    """Return an unchanged copy of buffer."""
    return transform(buffer, TransformMode.IDENTITY)


def apply_rotate_saturate(buffer, *, clamp_saturation: bool = True):
    """Rotate hue by 180 degrees and boost saturation 4x."""
    return transform(buffer, TransformMode.ROTATE_SATURATE, clamp_saturation=clamp_saturation)


def apply_hue_stretch(buffer, *, clamp_saturation: bool = True):
    """Stretch hue away from 216 degrees and boost saturation 4x."""
    return transform(buffer, TransformMode.HUE_STRETCH, clamp_saturation=clamp_saturation)
